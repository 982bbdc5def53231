"""Display and arena configuration constants."""

# Arena dimensions (pixels)
ARENA_WIDTH = 1280
ARENA_HEIGHT = 720

# Simulation and render rates
TICK_RATE = 60  # Simulation ticks per second
FRAME_RATE = 60  # Render frames per second
MAX_TICKS_PER_FRAME = 5  # Accumulator cap after a long frame

# Logging
SEPARATOR_WIDTH = 60

# Colours
BACKGROUND_COLOR = "#1A1F2C"
CENTER_LINE_COLOR = (255, 255, 255, 51)
PURPLE_COLOR = "#9b87f5"
BLUE_COLOR = "#0EA5E9"
HOT_BALL_COLOR = "#FF6B6B"
IMPACT_COLOR = "#FF6B6B"
NEUTRAL_BALL_COLOR = "#FFFFFF"
BOUNCE_COLOR = "#FFFFFF"
