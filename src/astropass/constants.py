"""
The `constants` module defines the mathematical, time and physical constants used by astropass.

Distances are in kilometres throughout, following the NORAD element-set
conventions, rather than SI metres.
"""

from math import pi as PI

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = PI / 180.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 180.0 / PI

"""
Full turn. Units: *rad*
"""
TWOPI = 2.0 * PI

# Time Constants

"""
Number of seconds in a day. Units: *s*
"""
SECONDS_PER_DAY = 86400.0

"""
Unix timestamp of the J2000.0 epoch (2000-01-01 12:00:00). Units: *s*
"""
J2000_TIMESTAMP = 946728000.0

"""
Unix timestamp of 2000-01-01 00:00:00 UT, the anchor for days-since-1950. Units: *s*
"""
Y2000_TIMESTAMP = 946684800.0

"""
Days from 1950 January 0.0 UT to 2000-01-01 00:00:00 UT. Units: *days*
"""
DS50_Y2000 = 18263.0

"""
Number of days in a Julian century. Units: *days*
"""
DAYS_PER_CENTURY = 36525.0

# Physical Constants
"""
Astronomical Unit. Units: *km*

References:

1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998
"""
AU = 149597870.0

"""
Mean diameter of the Sun. Units: *km*

References:

1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, Appendix I
"""
SUN_DIAMETER = 1392000.0

# Earth Constants
"""
Earth's semi-major axis as defined by the WGS84 geodetic system. Units: *km*

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_a = 6378.137

"""
Earth's ellipsoidal flattening.  WGS84 Value.

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_f = 1.0 / 298.257223563
