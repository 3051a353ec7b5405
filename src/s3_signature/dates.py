"""Timestamp formatting used by the signing process."""

import dataclasses
import datetime as dt
import email.utils


@dataclasses.dataclass(frozen=True)
class SigningTime:
    """A single UTC instant shared by every step of one signing operation.

    Naive datetimes are taken to be UTC. Sub-second precision is dropped,
    since none of the wire formats carry it.
    """

    value: dt.datetime

    def __post_init__(self):
        value = self.value
        if value.tzinfo is None:
            value = value.replace(tzinfo=dt.UTC)
        else:
            value = value.astimezone(dt.UTC)
        object.__setattr__(self, "value", value.replace(microsecond=0))

    @classmethod
    def now(cls) -> "SigningTime":
        return cls(dt.datetime.now(dt.UTC))

    @classmethod
    def coerce(cls, value: "SigningTime | dt.datetime | None") -> "SigningTime":
        if value is None:
            return cls.now()
        if isinstance(value, SigningTime):
            return value
        return cls(value)

    def after(self, seconds: int) -> "SigningTime":
        return SigningTime(self.value + dt.timedelta(seconds=seconds))

    def to_compact_date(self) -> str:
        return self.value.strftime("%Y%m%d")

    def to_compact_datetime(self) -> str:
        return self.value.strftime("%Y%m%dT%H%M%SZ")

    def to_http_date(self) -> str:
        # strftime's %a and %b follow the locale
        return email.utils.format_datetime(self.value, usegmt=True)

    def to_iso8601(self) -> str:
        return self.value.strftime("%Y-%m-%dT%H:%M:%SZ")
