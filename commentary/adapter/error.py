"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class NotificationDeliveryError(AdapterError):
    """An event could not be handed to the notification relay."""

    pass
