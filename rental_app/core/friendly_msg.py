from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

DEFAULT_MESSAGE = "Something went wrong on our end. Please try again."

# first matching type wins, so subclasses come before their bases
FRIENDLY_MESSAGES = (
    (IntegrityError, "This change conflicts with an existing record."),
    (OperationalError, "The database is busy right now. Please try again shortly."),
    (SQLAlchemyError, "Temporary issue while accessing data. Please try again shortly."),
    (TimeoutError, "The request took too long. Please try again later."),
    (PermissionError, "You don’t have permission to perform this action."),
    (ValueError, "Invalid data received. Please check your input and try again."),
    (KeyError, "Some required information is missing."),
)


def get_friendly_message(error: Exception) -> str:
    for exc_type, msg in FRIENDLY_MESSAGES:
        if isinstance(error, exc_type):
            return msg
    return DEFAULT_MESSAGE
