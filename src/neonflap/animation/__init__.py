"""Animation module for NEONFLAP."""

from neonflap.animation.particles import Particle, ParticleEmitter, EmitterConfig

__all__ = ["Particle", "ParticleEmitter", "EmitterConfig"]
