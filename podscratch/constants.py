"""Constants shared by the interpreter, the pods and the block catalog."""

DEFAULT_FPS = 60

# Resource types provided by the scratch pod
RESOURCE_SPRITE = "sprite"
RESOURCE_STAGE = "stage"
STAGE_NAME = "stage"
DEFAULT_BACKDROP = "backdrop1"

# Structural block kinds the interpreter itself knows about
BEGIN = "begin"
END = "end"
OTHERWISE = "otherwise"
CONSTANT = "c"
FUNCTION = "f"

# Boolean values are passed between blocks as strings
TRUE = "true"
FALSE = "false"

# Per-instance state key that survives a block reset (event edge detection)
LAST_SEEN = "last_seen"

# How many recent sound names a resource remembers
PLAYED_SOUNDS_LIMIT = 100
