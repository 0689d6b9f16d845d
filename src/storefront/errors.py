"""Access errors raised by the storefront domain.

Validation and lookup failures use Protean's own ``ValidationError`` and
``ObjectNotFoundError``. These two cover the cases Protean has no notion of:
a caller without a session, and a caller acting on someone else's data.
"""


class AccessError(Exception):
    status_code = 403

    def __init__(self, messages):
        if isinstance(messages, str):
            messages = {"_entity": [messages]}
        self.messages = messages
        super().__init__(messages)


class UnauthorizedError(AccessError):
    status_code = 401


class ForbiddenError(AccessError):
    status_code = 403
