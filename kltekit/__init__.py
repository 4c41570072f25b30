"""Device-support utilities: target detection, message queue, config, logging, timers, LEDs, power and recovery keys."""

__version__ = "0.1.0"