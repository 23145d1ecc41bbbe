"""In-memory alert list."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

from pyfleet.exceptions import FleetStateError
from pyfleet.models._base import utcnow
from pyfleet.models.alert import Alert, AlertCategory, AlertType
from pyfleet.state.events import GeofenceEvent, GeofenceEventKind

_logger = logging.getLogger(__name__)


def alert_from_geofence_event(event: GeofenceEvent, *, alert_id: str, vehicle_name: str = "") -> Alert:
    """Describe a boundary crossing as a ``geofence`` alert.

    Exits are warnings, entries are informational.
    """
    fence = event.geofence_name or event.geofence_id
    if event.kind == GeofenceEventKind.EXIT:
        alert_type, title, message = AlertType.WARNING, "Geofence Exit", f"Vehicle left {fence}"
    else:
        alert_type, title, message = AlertType.INFO, "Geofence Entry", f"Vehicle entered {fence}"
    return Alert(
        id=alert_id,
        type=alert_type,
        category=AlertCategory.GEOFENCE,
        title=title,
        message=message,
        vehicle_name=vehicle_name,
        vehicle_id=event.vehicle_id,
        location=fence,
        timestamp=event.observed_at,
    )


class AlertStore:
    """Alerts, newest first."""

    def __init__(
        self,
        alerts: Iterable[Alert] = (),
        *,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ) -> None:
        self._clock = clock
        self._id_factory = id_factory
        self._alerts: dict[str, Alert] = {}
        for alert in alerts:
            if alert.id in self._alerts:
                raise FleetStateError(f"duplicate alert id {alert.id!r}")
            self._alerts[alert.id] = alert

    def __len__(self) -> int:
        return len(self._alerts)

    def alerts(self) -> list[Alert]:
        return list(self._alerts.values())

    def get(self, alert_id: str) -> Alert | None:
        return self._alerts.get(alert_id)

    def _insert(self, alert: Alert) -> Alert:
        self._alerts = {alert.id: alert, **self._alerts}
        return alert

    def create(self, **fields: Any) -> Alert:
        """Raise a new alert; ``timestamp`` defaults to the store clock."""
        data = {k: v for k, v in fields.items() if k != "id"}
        if data.get("timestamp") is None:
            data["timestamp"] = self._clock()
        return self._insert(Alert.model_validate({**data, "id": self._id_factory()}))

    def record_geofence_event(self, event: GeofenceEvent, *, vehicle_name: str = "") -> Alert:
        alert = alert_from_geofence_event(event, alert_id=self._id_factory(), vehicle_name=vehicle_name)
        _logger.debug("Recorded %s alert id=%s vehicle=%s", alert.category.value, alert.id, alert.vehicle_id)
        return self._insert(alert)

    def _set(self, alert_id: str, **updates: Any) -> bool:
        alert = self._alerts.get(alert_id)
        if alert is None:
            return False
        self._alerts[alert_id] = alert.model_copy(update=updates)
        return True

    def dismiss(self, alert_id: str) -> bool:
        """Remove an alert from the list."""
        return self._alerts.pop(alert_id, None) is not None

    def resolve(self, alert_id: str) -> bool:
        return self._set(alert_id, is_resolved=True)

    def mark_read(self, alert_id: str) -> bool:
        return self._set(alert_id, is_read=True)

    def unread_count(self) -> int:
        """Alerts that are neither read nor resolved."""
        return sum(1 for a in self._alerts.values() if not a.is_read and not a.is_resolved)

    def filter(self, *, type: AlertType | str | None = None) -> list[Alert]:  # noqa: A002
        """Unresolved alerts, optionally of one *type*.

        ``None`` and ``"all"`` both select every type.
        """
        wanted = None if type in (None, "all") else AlertType(type)
        return [a for a in self._alerts.values() if a.is_open and (wanted is None or a.type == wanted)]
