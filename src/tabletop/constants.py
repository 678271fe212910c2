# Float tolerance used for edge tie-breaks and seat separation checks.
EPSILON = 1e-3

# Seat strips (HUD regions hugging a table edge), in screen pixels.
SEAT_STRIP_THICKNESS = 320.0
SEAT_STRIP_LENGTH = 520.0
# Smallest thickness/length a seat strip may be clamped to.
SEAT_STRIP_MIN_EXTENT = 1.0
# A touch farther than this from every edge is not an edge-join gesture.
EDGE_JOIN_MARGIN = 120.0

# Tokens sharing one board location are spread on a grid with this pitch.
TOKEN_GRID_SPACING = 32.0
# Gap kept between the footprints of neighbouring tokens on a shared location.
TOKEN_GRID_MARGIN = 4.0
TOKEN_FOOTPRINT_RADIUS = 12.0

# Motion defaults (milliseconds / pixels).
STEP_DURATION_MS = 250.0
BOUNCE_DURATION_MS = 180.0
BOUNCE_HEIGHT = 18.0
