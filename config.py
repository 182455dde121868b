# ============================================================================
# CONFIGURATION
# ============================================================================

# Packet signature
SIGNATURE = b"GLOW"

# Serial settings
BAUD_RATE = 9600
DEVICE_NAME = "Arduino"  # Matched against port description / manufacturer

# Output packets per second
FPS = 10
# Frame loop rate, sampling runs once per frame
RENDER_FPS = 60

# Size of the image capture from camera
WIDTH = 512
HEIGHT = 512
MAX_CAMERA_INDEX = 5

# Number of smoothing steps, each halves the image size
SMOOTH = 1

# Sampling geometry
CONTROL_POINTS = 4
GLOW_COLORS = 16
SEGMENT_POINTS = (5, 8, 5)  # Sample points per line segment
SEGMENT_LIGHTS = (4, 7, 5)  # Points taken from each segment into the packet

# Color smoothing, share of the fresh sample per tick
BLEND_FACTOR = 0.1

# Gamma for the light controller
SATURATION_GAMMA = 0.75
VALUE_GAMMA = 1.5

# Light strip mounted mirrored relative to the camera
DEFAULT_FLIP = True

# Settings file path
SETTINGS_FILE = "glowlight_config.json"

# Status line every N packets
LOG_EVERY = 30
