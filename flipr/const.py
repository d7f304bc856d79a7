"""Constants for the Flipr library."""

API_URL = "https://apis.goflipr.com"

# API endpoints
ENDPOINT_TOKEN = "/OAuth2/token"
ENDPOINT_MODULES = "/modules"
ENDPOINT_LAST_SURVEY = "/modules/{serial}/survey/last"
ENDPOINT_HUB_STATE = "/hub/{serial}/state"
ENDPOINT_HUB_MANUAL = "/hub/{serial}/Manual/{state}"
ENDPOINT_HUB_MODE = "/hub/{serial}/mode/{mode}"

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_FORM = "application/x-www-form-urlencoded"

# Values of CommercialType.Value
COMMERCIAL_TYPE_READER = "AnalysR"
COMMERCIAL_TYPE_HUB = "Start"

# Hub behaviours accepted by the mode endpoint
HUB_MODE_AUTO = "auto"
HUB_MODE_PLANNING = "planning"
HUB_MODE_MANUAL = "manual"
HUB_MODES = (HUB_MODE_AUTO, HUB_MODE_PLANNING, HUB_MODE_MANUAL)

# Seconds between two polls of the same accessory
POLL_INTERVAL = 60

MANUFACTURER = "Flipr"
DEFAULT_NAME = "Flipr"

# Host service types
SERVICE_ACCESSORY_INFORMATION = "AccessoryInformation"
SERVICE_TEMPERATURE_SENSOR = "TemperatureSensor"
SERVICE_LIGHT_SENSOR = "LightSensor"
SERVICE_SWITCH = "Switch"

# Host characteristics
CHAR_MANUFACTURER = "Manufacturer"
CHAR_MODEL = "Model"
CHAR_SERIAL_NUMBER = "SerialNumber"
CHAR_CURRENT_TEMPERATURE = "CurrentTemperature"
CHAR_CURRENT_AMBIENT_LIGHT_LEVEL = "CurrentAmbientLightLevel"
CHAR_ON = "On"

# Subtypes of the two hub switches
SUBTYPE_POWER = "power"
SUBTYPE_AUTO_MODE = "auto_mode"
