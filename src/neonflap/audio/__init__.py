"""Audio cues for NEONFLAP."""

from neonflap.audio.engine import AudioEngine, Tone, TONES, render_tone

__all__ = ["AudioEngine", "Tone", "TONES", "render_tone"]
