"""Cron schedule encoder.

Translates a manifest ``cron`` entry into the provider's cron job encoding.
The result always starts from the fully defaulted ``CronJob`` so that a
freshly encoded job compares equal to the same job read back from the
provider -- the webspace update diff depends on this.
"""

from __future__ import annotations

from hostsync.provisioner.errors import InvalidCronJobError
from hostsync.provisioner.models.enums import CronJobType, Schedule
from hostsync.provisioner.models.manifest import CronjobConfig
from hostsync.provisioner.models.resources import CronJob

RECURRENCE: dict[str, str] = {
    "day": Schedule.DAILY.value,
    "week": Schedule.WEEKLY.value,
    "month": Schedule.MONTHLY.value,
}

DEFAULT_WEEKDAY = "mon"
DEFAULT_DAY_OF_MONTH = 1
DEFAULT_DAYPART = "1-5"


def encode_cron_job(config: CronjobConfig, interpreter_version: str | None, *, comments: str = "") -> CronJob:
    """Encode one cron entry.

    Raises ``InvalidCronJobError`` unless exactly one of ``php`` / ``cmd`` is
    set, or when a monthly ``on`` is not a day number.
    """
    has_php = bool(config.php and config.php.strip())
    has_cmd = bool(config.cmd and config.cmd.strip())
    if has_php == has_cmd:
        msg = 'script or command required: configure exactly one of "php" or "cmd" for each cron job'
        raise InvalidCronJobError(msg)

    command_line = (config.php if has_php else config.cmd) or ""
    script, *parameters = command_line.split()

    job = CronJob(
        type=(CronJobType.PHP if has_php else CronJobType.BASH).value,
        comments=comments,
        script=script,
        parameters=parameters,
        interpreter_version=interpreter_version if has_php else None,
        schedule=RECURRENCE.get(config.every, config.every),
    )

    # Exactly one schedule-specific field is populated; the rest keep defaults.
    if job.schedule == Schedule.WEEKLY:
        job.weekday = str(config.on if config.on is not None else DEFAULT_WEEKDAY).lower()
    elif job.schedule == Schedule.MONTHLY:
        job.day_of_month = _day_of_month(config.on)
    elif job.schedule == Schedule.DAILY:
        job.daypart = str(config.on if config.on is not None else DEFAULT_DAYPART)

    return job


def encode_cron_jobs(
    configs: list[CronjobConfig], interpreter_version: str | None, *, comments: str = ""
) -> list[CronJob]:
    return [encode_cron_job(c, interpreter_version, comments=comments) for c in configs]


def _day_of_month(value: str | int | None) -> int:
    if value is None:
        return DEFAULT_DAY_OF_MONTH
    try:
        return int(value)
    except ValueError:
        msg = f'Monthly cron jobs need a day number for "on", got {value!r}'
        raise InvalidCronJobError(msg) from None
