"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;
}

.chat-message {
    height: auto;
    margin: 1 0 0 0;
    padding: 0 1;
}

.user-message {
    border-left: thick $accent;
}

.assistant-message {
    border-left: thick $primary;
}

.message-header {
    text-style: bold;
    color: $text-muted;
}

.user-message > .message-header {
    color: $accent;
}

.assistant-message > .message-header {
    color: $primary;
}

.message-content, .answer-content {
    height: auto;
}

.section-title {
    text-style: bold;
    color: $secondary;
}

.search-results {
    height: auto;
    margin: 1 0 0 2;
    padding: 0 0 0 1;
    border-left: solid $secondary 50%;
}

.result-list {
    height: auto;
    color: $text-muted;
}

.thinking-block {
    height: auto;
    margin: 1 0;
    padding: 0 0 0 1;
    border-left: solid $secondary 40%;
}

.thinking-content {
    height: auto;
    color: $text-muted;
}

#error-banner {
    height: auto;
    margin: 0 1;
    padding: 0 1;
    background: $error 15%;
    border: round $error;
    color: $error;
}

#log-panel {
    height: 10;
    border: round $secondary 60%;
    border-title-color: $secondary;
}

#chat-input-bar {
    height: auto;
    padding: 0 1;
}

#chat-input {
    width: 1fr;
}

#send-btn {
    min-width: 16;
}
"""
