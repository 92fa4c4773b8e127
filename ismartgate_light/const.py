"""Constants for the iSmartGate Light client."""
from typing import Final

# Configuration keys
CONF_NAME: Final = "name"
CONF_HOSTNAME: Final = "hostname"
CONF_USERNAME: Final = "username"
CONF_PASSWORD: Final = "password"
CONF_DEBUG: Final = "debug"
CONF_TIMEOUT: Final = "timeout"

DEFAULT_NAME: Final = "iSmartGate Light"
DEFAULT_TIMEOUT: Final = 30

# Controller endpoints
LOGIN_PATH: Final = "/index.php"
CONFIG_PATH: Final = "/index.php?op=config#light-val"
LIGHT_PATH: Final = "/isg/light.php"

# Login form literals expected by index.php
FORM_SEND_LOGIN: Final = "Sign in"
FORM_SESSION_OPEN: Final = "1"

# Hidden input holding the session token on the config page
WEBTOKEN_ID: Final = "webtoken"

OP_ACTIVATE: Final = "activate"

# Body returned by light.php once the webtoken is no longer valid
RESTRICTED_ACCESS: Final = "Restricted Access"

# The controller numbers the relay inversely: light=0 switches on and
# confirms with "1", light=1 switches off and confirms with "0".
LIGHT_ON: Final = "0"
LIGHT_OFF: Final = "1"
CONFIRM_ON: Final = "1"
CONFIRM_OFF: Final = "0"

# Re-login attempts per command when the session has expired
MAX_LOGIN_RETRIES: Final = 1
