"""Provisioning engine for hosting.de resources.

- **locator**: read-only lookups with at-most-one-match enforcement
- **encoding**: cron schedules, vhost locations, credentials
- **managers**: one provider call per function, per resource kind
- **reconciler**: find / create / update orchestration for one application
- **pruner**: removal of deployments that are no longer wanted
- **gateway**: httpx transport for the provider JSON API
"""
