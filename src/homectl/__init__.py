"""
Smart Home Controller (homectl).

Simulated home device management: lights, fans, air conditioners,
thermostats and security cameras with power, connectivity and a single
adjustable parameter each, plus a bounded activity log.
"""

__version__ = "0.1.0"
