"""Shared constants for bundlekeeper records and collaborators."""

# Document schema versions
RUN_SCHEMA_VERSION = "1.0.1"
PARAMETER_SET_SCHEMA_VERSION = "1.0.1"
CLAIM_SCHEMA_VERSION = "1.0.0-DRAFT+b5ed2f3"

# Execution status values
STATUS_RUNNING = "running"
STATUS_SUCCEEDED = "succeeded"
STATUS_FAILED = "failed"
STATUS_CANCELED = "canceled"
STATUS_PENDING = "pending"
STATUS_UNKNOWN = "unknown"

# Built-in bundle actions
ACTION_INSTALL = "install"
ACTION_UPGRADE = "upgrade"
ACTION_UNINSTALL = "uninstall"

# Installation identity in the execution claim is "<namespace>/<installation>"
INSTALLATION_SEPARATOR = "/"

# Persisted identity field used by the document store
DOCUMENT_ID_FIELD = "_id"

# Environments
ENV_DEVELOPMENT = "development"
ENV_PRODUCTION = "production"

# Secret backends
SECRET_BACKEND_MEMORY = "memory"
SECRET_BACKEND_FILESYSTEM = "filesystem"

DEFAULT_COMMAND_TIMEOUT = 30
DEFAULT_SECRETS_DIR = "/var/lib/bundlekeeper/secrets"
