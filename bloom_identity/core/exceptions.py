class InsufficientDataError(ValueError):
    """
    Raised when the conversation source has too few analyzed messages.

    Callers are expected to fall back to a manual elicitation flow.
    """

    def __init__(self, message_count: int, minimum: int):
        self.message_count = message_count
        self.minimum = minimum
        super().__init__(
            f"Insufficient conversation data: {message_count} messages found (minimum {minimum} required)"
        )
