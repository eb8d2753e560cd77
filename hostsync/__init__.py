"""hostsync - declarative provisioning for hosting.de webspaces."""
