GRID_ROWS = 10
GRID_COLS = 6
INITIAL_ROWS = 4

TILE_VALUE_MIN = 1
TILE_VALUE_MAX = 9

TARGET_MIN = 10
TARGET_MAX = 20

POINTS_PER_TILE = 10

# Seconds per timed round before a row is injected.
TIME_PER_ROUND = 30
# Delay before the classic-mode row append so the clear is visible on screen.
ROW_APPEND_DELAY = 0.2

TILE_SIZE = 56
BOTTOM_MARGIN = 20
HUD_HEIGHT = 90

# Board maximum footprint relative to window (percentage of window width/height).
# The render/layout code will size the board so it does not exceed either percentage.
BOARD_MAX_WIDTH_PCT = 0.60
BOARD_MAX_HEIGHT_PCT = 0.80

WINDOW_WIDTH = 800
WINDOW_HEIGHT = 720
WINDOW_TITLE = "SumStack"
