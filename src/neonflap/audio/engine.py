"""
NEONFLAP Audio Engine - three synthesized cues.

Jump: rising sine chirp. Score: short triangle ding. Crash: falling
sawtooth growl. Sounds are generated once at startup; there are no
audio assets.
"""

import array
import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, Optional

import pygame

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100


# Oscillators take a phase in cycles
def sine(phase: float) -> float:
    """Sine wave oscillator."""
    return math.sin(2 * math.pi * phase)


def triangle(phase: float) -> float:
    """Triangle wave oscillator."""
    p = phase % 1
    return 4 * abs(p - 0.5) - 1


def saw(phase: float) -> float:
    """Sawtooth wave oscillator."""
    return 2 * (phase % 1) - 1


WAVES: Dict[str, Callable[[float], float]] = {
    "sine": sine,
    "triangle": triangle,
    "sawtooth": saw,
}


@dataclass(frozen=True)
class Tone:
    """A one-shot tone with a frequency sweep and a decaying envelope."""
    wave: str
    start_freq: float
    end_freq: float
    duration: float  # seconds
    gain: float
    sweep: str = "linear"  # linear or exponential

    def frequency_at(self, t: float) -> float:
        progress = min(1.0, t / self.duration)
        if self.sweep == "exponential":
            return self.start_freq * (self.end_freq / self.start_freq) ** progress
        return self.start_freq + (self.end_freq - self.start_freq) * progress

    def gain_at(self, t: float) -> float:
        # Exponential decay down to 0.01 at the end of the tone
        progress = min(1.0, t / self.duration)
        return self.gain * (0.01 / self.gain) ** progress


TONES: Dict[str, Tone] = {
    "jump": Tone("sine", 300, 500, 0.1, 0.3),
    "score": Tone("triangle", 800, 800, 0.15, 0.1),
    "crash": Tone("sawtooth", 150, 50, 0.3, 0.3, sweep="exponential"),
}


def render_tone(tone: Tone, sample_rate: int = SAMPLE_RATE) -> array.array:
    """Render a tone to signed 16-bit mono samples."""
    oscillator = WAVES[tone.wave]
    samples = array.array('h')
    phase = 0.0
    for i in range(int(sample_rate * tone.duration)):
        t = i / sample_rate
        val = oscillator(phase) * tone.gain_at(t)
        samples.append(int(max(-1.0, min(1.0, val)) * 32767))
        # Accumulate phase so sweeps stay continuous
        phase += tone.frequency_at(t) / sample_rate
    return samples


class AudioEngine:
    """
    Plays the gameplay cues through pygame.mixer.

    Implements the event sink interface (on_jump/on_score/on_crash). If the
    mixer cannot start, every call is a silent no-op.
    """

    def __init__(self, muted: bool = False):
        self._initialized = False
        self._sounds: Dict[str, pygame.mixer.Sound] = {}
        self._volume = 1.0
        self._muted = muted

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def init(self) -> bool:
        """Initialize the mixer and generate all cues."""
        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 512)
            pygame.mixer.init()
            self._generate_all_sounds()
            self._initialized = True
            logger.info("Audio engine initialized")
            return True
        except Exception as e:
            logger.error(f"Failed to initialize audio: {e}")
            return False

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (auto-converted to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    def _generate_all_sounds(self) -> None:
        for name, tone in TONES.items():
            self._sounds[name] = self._create_sound(render_tone(tone))
        logger.info(f"Generated {len(self._sounds)} sounds")

    def play(self, sound_name: str) -> Optional[pygame.mixer.Channel]:
        """Play a sound effect."""
        if not self._initialized or self._muted:
            return None

        sound = self._sounds.get(sound_name)
        if not sound:
            logger.warning(f"Sound not found: {sound_name}")
            return None

        sound.set_volume(self._volume)
        return sound.play()

    def set_muted(self, muted: bool) -> None:
        self._muted = muted

    def toggle_mute(self) -> bool:
        self._muted = not self._muted
        return self._muted

    # Event sink
    def on_jump(self) -> None:
        self.play("jump")

    def on_score(self) -> None:
        self.play("score")

    def on_crash(self) -> None:
        self.play("crash")

    def cleanup(self) -> None:
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
