"""Application constants."""

USER_AGENT = "wastesurvey/1.0 (+municipal survey client)"

STORE_ACTIONS = (
    "ping",
    "getRecords",
    "saveRecord",
    "deleteRecord",
    "uploadImage",
)
STATUS_SUCCESS = "success"

CONNECTION_LOADING = "loading"
CONNECTION_ONLINE = "online"
CONNECTION_OFFLINE = "offline"

DEFAULT_PAGE_SIZE = 20
MAX_VISIBLE_ROWS = 100

COORDINATE_DECIMALS = 6
DIRECTIONS_URL = "https://www.google.com/maps/dir/?api=1&destination={lat},{lng}"

# Substring markers are matched independently: one method can land in several buckets.
WASTE_BUCKET_CONTAINS = (
    ("green_bag", "ถุงเขียว"),
    ("wet_bin", "ถังขยะเปียก"),
)
WASTE_BUCKET_EQUALS = (
    ("animal_feed", "นำไปเป็นอาหารของสัตว์"),
    ("compost", "นำไปทำปุ๋ย"),
)
WASTE_BUCKET_LABELS = {
    "green_bag": "ถุงเขียว (รวม)",
    "wet_bin": "ถังขยะเปียก (รวม)",
    "animal_feed": "อาหารสัตว์",
    "compost": "ทำปุ๋ย",
}

# Ordered: the first matching marker wins.
WATER_BUCKET_RULES = (
    ("trap_installed", "มีการติดตั้ง"),
    ("trap_pending", "รอการติดตั้ง"),
    ("private_area", "พื้นที่ส่วนตัว"),
    ("septic_tank", "บ่อเกรอะ"),
    ("public_drain", "ท่อระบายน้ำสาธารณะ"),
)
WATER_BUCKET_LABELS = {
    "trap_installed": "ติดตั้งบ่อดักแล้ว",
    "trap_pending": "รอติดตั้ง",
    "private_area": "ลงพื้นที่ส่วนตัว",
    "septic_tank": "ลงบ่อเกรอะ",
    "public_drain": "ลงท่อสาธารณะ",
}

EXIT_SUCCESS = 0
EXIT_PARTIAL = 10
EXIT_HARD_FAIL = 20

JSON_LOG_FIELDS = (
    "timestamp",
    "session_id",
    "operation",
    "action",
    "record_id",
    "status",
    "duration_ms",
    "rows_out",
    "error_code",
    "message",
)
