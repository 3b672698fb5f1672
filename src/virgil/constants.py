"""Constants for virgil."""

# Subprocess timeouts (seconds)
GIT_TIMEOUT = 30

# Title used when a markdown walkthrough has no "# " heading
UNTITLED_TITLE = "Untitled Walkthrough"

# Persisted walkthrough documents
WALKTHROUGH_SUFFIX = ".walkthrough.json"
CONFIG_DIR_NAME = ".virgil"

# Limits for structured frontmatter values stored as metadata strings
MAX_METADATA_NODES = 10_000
MAX_METADATA_DEPTH = 50
MAX_METADATA_CHARS = 65_536
