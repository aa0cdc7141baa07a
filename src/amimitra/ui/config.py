"""UI configuration constants.

Centralizes magic numbers and display strings for the UI module.
"""


class LogLevel:
    """Log level constants with numeric values for comparison.

    Standard logging hierarchy: DEBUG < INFO < WARNING < ERROR
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


# Branding
APP_TITLE = "Ami Mitra"
WELCOME_HEADLINE = "Welcome to Ami Mitra!"
WELCOME_BODY = "Start a conversation and I'll be happy to help."

# Header status line
STATUS_TYPING = "AI is typing..."
STATUS_READY = "Ready to chat"
STATUS_CONNECTING = "Connecting..."
STATUS_OFFLINE = "Offline"

# Sender labels in message headers
SENDER_LABELS = {
    "user": "You",
    "bot": "Bot",
}

# Input
INPUT_PLACEHOLDER = "Type your message..."
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages
