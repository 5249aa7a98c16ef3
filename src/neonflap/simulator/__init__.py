"""Desktop simulator for NEONFLAP."""

from neonflap.simulator.window import SimulatorWindow

__all__ = ["SimulatorWindow"]
