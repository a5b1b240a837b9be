# Overview: Closed value sets shared by the domain model, validation and display helpers.

EVENT_TYPES = ("marriage", "reception", "other")

# pending -> confirmed -> preparing -> completed, or cancelled from any state.
# The server owns the transition graph; the client only checks membership.
ORDER_STATUSES = ("pending", "confirmed", "preparing", "completed", "cancelled")

STOCK_DIRECTIONS = ("add", "subtract")

REPORT_PERIODS = ("daily", "weekly", "monthly")

STATUS_COLORS = {
    "pending": "warning",
    "confirmed": "info",
    "preparing": "primary",
    "completed": "success",
    "cancelled": "error",
}
DEFAULT_STATUS_COLOR = "default"
