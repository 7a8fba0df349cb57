"""Contract and process reminders.

Server-side reminder emails and the per-user in-app notification center
share this package; they meet only through the notification ids, priorities
and the retention windows configured in :mod:`contract_reminders.config`.
"""
