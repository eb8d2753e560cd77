"""Routing rule compiler: manifest ``locations`` -> vhost location records."""

from __future__ import annotations

from collections.abc import Mapping

from hostsync.provisioner.models.enums import LocationType, MatchType
from hostsync.provisioner.models.manifest import LocationSpec
from hostsync.provisioner.models.resources import Location


def infer_match_type(match_string: str) -> MatchType:
    """Decided by the leading character only."""
    if match_string.startswith("^"):
        return MatchType.REGEX
    if match_string.startswith("/"):
        return MatchType.DIRECTORY
    return MatchType.DEFAULT


def compile_location(match_string: str, spec: LocationSpec) -> Location:
    """Compile one rule.

    ``passthru`` has three distinct meanings:

    - a string: that script handles the request, PHP enabled
    - ``False``: no script, PHP disabled
    - unset (or ``True``): no explicit script, PHP enabled so the webspace's
      default handler applies
    """
    if isinstance(spec.passthru, str):
        map_script, php_enabled = spec.passthru, True
    elif spec.passthru is False:
        map_script, php_enabled = "", False
    else:
        map_script, php_enabled = "", True

    return Location(
        match_string=match_string,
        match_type=infer_match_type(match_string),
        location_type=LocationType.BLOCK_ACCESS if spec.allow is False else LocationType.GENERIC,
        map_script=map_script,
        php_enabled=php_enabled,
    )


def compile_locations(locations: Mapping[str, LocationSpec]) -> list[Location]:
    """Compile all rules, preserving manifest order."""
    return [compile_location(match_string, spec) for match_string, spec in locations.items()]
