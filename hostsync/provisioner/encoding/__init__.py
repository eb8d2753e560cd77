"""Translations from manifest input to provider encodings.

- **schedule**: cron entries -> ``CronJob``
- **routing**: web locations -> vhost ``Location`` records
- **credentials**: fresh passwords for new users

Nothing in this package talks to the provider.  The schedule and routing
encoders are total functions of their input, so repeated runs produce
identical payloads.
"""

from hostsync.provisioner.encoding.credentials import CredentialFactory
from hostsync.provisioner.encoding.routing import compile_location, compile_locations, infer_match_type
from hostsync.provisioner.encoding.schedule import encode_cron_job, encode_cron_jobs

__all__ = [
    "CredentialFactory",
    "compile_location",
    "compile_locations",
    "encode_cron_job",
    "encode_cron_jobs",
    "infer_match_type",
]
