"""
Human-readable statements derived from an ObserverEffects snapshot.

Which observer "runs slow" or "looks redshifted" depends on who sits deeper in
the well, so every comparison picks its wording from the sign of the effect
and reports a positive magnitude.
"""

from dataclasses import asdict, dataclass

from .constants import (
    SCALE_FACTOR, SECONDS_PER_DAY, SECONDS_PER_HOUR, SECONDS_PER_MINUTE,
    SECONDS_PER_MONTH, SECONDS_PER_YEAR,
)
from .errors import InvalidArgument
from .metric import einstein_ring_radius, schwarzschild_radius


@dataclass(frozen=True)
class Facts:
    time_dilation: str
    clock_drift: str
    light_travel: str
    redshift: str
    escape_velocity1: str
    escape_velocity2: str
    proper_distance: str
    horizon: str
    einstein_ring: str

    def as_dict(self):
        return asdict(self)

    def lines(self):
        return list(asdict(self).values())


def _plural(count, unit):
    return f"{count} {unit}{'' if count == 1 else 's'}"


def format_duration(seconds):
    """Render a duration as '2 days 3 hours 1 second'; under a minute keeps decimals."""
    if seconds < 0:
        raise InvalidArgument(f"duration must be non-negative, got {seconds}")
    if seconds < 60:
        return f"{seconds:.2f} seconds"

    parts = []
    remaining = seconds
    for unit, size in (("year", SECONDS_PER_YEAR), ("month", SECONDS_PER_MONTH),
                       ("day", SECONDS_PER_DAY), ("hour", SECONDS_PER_HOUR),
                       ("minute", SECONDS_PER_MINUTE)):
        count = int(remaining // size)
        remaining = remaining % size
        if count > 0:
            parts.append(_plural(count, unit))
    whole_seconds = int(remaining)
    if whole_seconds > 0:
        parts.append(_plural(whole_seconds, "second"))
    return " ".join(parts)


def _excess(ratio):
    # how much larger the bigger side is, as a positive fraction
    return ratio - 1.0 if ratio >= 1.0 else 1.0 / ratio - 1.0


def generate_facts(effects, mass, scale_factor=SCALE_FACTOR):
    rel = effects.relative_time_dilation
    drift = _excess(rel)
    if rel > 1.0:
        time_fact = (f"Observer 2 experiences time {drift * 100:.4f}% slower than Observer 1 "
                     f"due to being deeper in the gravitational well.")
    elif rel < 1.0:
        time_fact = (f"Observer 1 experiences time {drift * 100:.4f}% slower than Observer 2 "
                     f"due to being deeper in the gravitational well.")
    else:
        time_fact = "Both observers' clocks tick at the same rate."

    clock_fact = (f"After 1 year, their clocks would differ by approximately "
                  f"{format_duration(SECONDS_PER_YEAR * drift)}.")

    light_fact = (f"Light takes approximately {effects.light_travel_time:.2f} time units "
                  f"to travel between the observers.")

    z = effects.redshift
    if z > 0:
        redshift_fact = f"Light from Observer 1 appears redshifted by {z * 100:.4f}% to Observer 2."
    elif z < 0:
        # inverse shift for light going the other way
        back = 1.0 / (1.0 + z) - 1.0
        redshift_fact = f"Light from Observer 2 appears redshifted by {back * 100:.4f}% to Observer 1."
    else:
        redshift_fact = "Light passes between the observers without any gravitational shift."

    return Facts(
        time_dilation=time_fact,
        clock_drift=clock_fact,
        light_travel=light_fact,
        redshift=redshift_fact,
        escape_velocity1=(f"Observer 1's escape velocity is "
                          f"{effects.observer1.escape_velocity * 100:.2f}% of the speed of light."),
        escape_velocity2=(f"Observer 2's escape velocity is "
                          f"{effects.observer2.escape_velocity * 100:.2f}% of the speed of light."),
        proper_distance=f"The proper distance between observers is {effects.proper_distance:.2f} units.",
        horizon=(f"At this mass, the event horizon would be at "
                 f"{schwarzschild_radius(mass, scale_factor):.2f} units from center."),
        einstein_ring=(f"Light from a distant source directly behind the mass would form "
                       f"an Einstein ring of radius {einstein_ring_radius(mass, scale_factor):.2f} units."),
    )
