"""ClassPrune - find JVM classes a whole-program shrinker would remove."""

__version__ = "0.1.0"
