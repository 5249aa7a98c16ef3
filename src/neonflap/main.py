"""
Main entry point for NEONFLAP.

Wires settings, persistence, the event bus, the engine and the effects
feed together and opens the desktop window.
"""

import asyncio
import logging
import sys

from neonflap.settings import Settings, get_settings


def setup_logging(debug: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )


async def run_simulator(settings: Settings) -> None:
    """Run the desktop version."""
    from neonflap.audio.engine import AudioEngine
    from neonflap.core.events import EventBus, attach_sink
    from neonflap.game.engine import FlapEngine
    from neonflap.game.loop import GameLoop
    from neonflap.simulator.window import SimulatorWindow
    from neonflap.storage.persistence import create_persistence

    logger = logging.getLogger(__name__)

    # Create shared components
    event_bus = EventBus()
    persistence = create_persistence(settings.storage.enabled, settings.storage.directory)
    engine = FlapEngine(settings=settings, persistence=persistence, event_bus=event_bus)
    loop = GameLoop(engine)

    # Audio is optional: without a device the game runs silent
    audio = AudioEngine(muted=settings.mute)
    if audio.init():
        attach_sink(event_bus, audio)
    else:
        logger.warning("Running without audio")

    window = SimulatorWindow(settings=settings, engine=engine, loop=loop, audio=audio)
    try:
        await window.run()
    finally:
        audio.cleanup()


def main() -> None:
    """Main entry point."""
    from dotenv import load_dotenv

    # Load environment variables
    load_dotenv()

    settings = get_settings()
    setup_logging(settings.debug)

    logger = logging.getLogger(__name__)
    logger.info("NEONFLAP starting...")

    try:
        asyncio.run(run_simulator(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("NEONFLAP stopped")


if __name__ == "__main__":
    main()
