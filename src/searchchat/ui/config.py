"""UI configuration constants.

Centralizes labels and refresh settings for the console and TUI renderers.
"""

# Live console refresh rate while a response streams
STREAM_REFRESH_PER_SECOND = 12

# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100

# Submit control labels
SUBMIT_LABEL = "Search"
SUBMIT_BUSY_LABEL = "Searching..."
INPUT_PLACEHOLDER = "Ask something..."

# Section titles
THINKING_TITLE = "Thinking"
RESULTS_TITLE = "Search Results"
USER_TITLE = "You"
ASSISTANT_TITLE = "Assistant"

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages
