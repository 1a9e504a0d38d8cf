"""Constants for jobby."""

# Environment variables consulted for the scratch directory, in order
TEMP_DIR_ENV_VARS = ("TMP", "TEMP", "TMPDIR")

# Environment variable naming the deployment environment
APPLICATION_ENV_VAR = "APPLICATION_ENV"

# Environment variable overriding the config file location
CONFIG_ENV_VAR = "JOBBY_CONFIG"
CONFIG_FILE = "jobby.toml"

LOCK_FILE_SUFFIX = ".lck"

# Local part and display name of the notification sender
MAIL_FROM_NAME = "jobby"

# Transport timeouts (seconds)
SMTP_TIMEOUT = 30
SENDMAIL_TIMEOUT = 60
