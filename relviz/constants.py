"""
Tuned constants for the relativity visualizer.

Units are arbitrary and scaled for visualization (G = c = 1). These values were
picked so the pictures look right, not derived from real GR; changing them to
"physical" values changes what the model shows.
"""

import math

# Keeps 2 * potential * SCALE_FACTOR < 1 for the slider ranges we offer
SCALE_FACTOR = 0.1
SPEED_OF_LIGHT = 1.0

# Smallest radius any 1/r term is evaluated at
RADIUS_EPSILON = 1e-6

# Curvature grid
GRID_SIZE = 60.0            # spatial extent of the lattice (-30..30)
GRID_RESOLUTION = 20        # cells per side
GRID_MIN_RADIUS = 2.0       # points closer than this sit "inside" the mass

# Light rays
RAY_COUNT = 8
RAY_STEPS = 100
LIGHT_SPEED_STEP = 0.5      # distance covered per ray step
RAY_HORIZON_CUTOFF = 2.5
RAY_DRAG_COEFFICIENT = 0.2

# Particles
TRAIL_CAPACITY = 20
DRAG_COEFFICIENT = 0.2
SPAWN_RADIUS_MIN = 10.0
SPAWN_RADIUS_MAX = 50.0
DEFAULT_PARTICLE_COUNT = 50
DEFAULT_PARTICLE_SPEED = 0.3
PARTICLE_DT = 0.1

# Observer view
OBSERVER_CIRCLES = (5, 10, 15, 20, 30, 40)
OBSERVER_ANGLES = (0, 45, 90, 135, 180, 225, 270, 315)
OBSERVER_LINE_RADIUS = (1.0, 50.0, 0.5)

# Gravitational waves (two equal sources at +/-10)
WAVE_POINT_COUNT = 100
WAVE_INITIAL_SEPARATION = 20.0
WAVE_MIN_SEPARATION = 4.0
WAVE_DECAY_RATE = 0.03
WAVE_ORBIT_FREQUENCY = 0.05
WAVE_RING_ROTATION = 0.1
WAVE_RING_START = 5.0
WAVE_RING_SPACING = 0.5

# Binary merger
MERGER_INITIAL_SEPARATION = 40.0
MERGER_MIN_SEPARATION = 5.0
MERGER_DECAY_RATE = 0.03
MERGER_ORBIT_FREQUENCY = 0.05
MERGER_MASS_FRACTION = 0.6  # heavier body's share of the total mass

# Extreme objects
NEUTRON_RADIUS_FACTOR = 0.3
JET_ANGLE = math.pi / 4     # magnetic axis tilt, 45 degrees
JET_LENGTH_FACTOR = 10.0
FIELD_LINE_COUNT = 20
DISC_RING_COUNT = 50

# Clock drift
SECONDS_PER_YEAR = 31536000
SECONDS_PER_MONTH = 2592000
SECONDS_PER_DAY = 86400
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60

# Control ranges offered to the user
MASS_RANGE = (1.0, 50.0)
SPIN_RANGE = (0.0, 1.0)
OBSERVER1_RANGE = (10.0, 50.0)
OBSERVER2_RANGE = (5.0, 45.0)
PARTICLE_COUNT_RANGE = (10, 200)
PARTICLE_SPEED_RANGE = (0.1, 0.5)
WAVE_AMPLITUDE_RANGE = (0.1, 2.0)
WAVE_FREQUENCY_RANGE = (0.01, 0.2)
# observers are kept at least this many horizon radii out
OBSERVER_HORIZON_MARGIN = 1.25
