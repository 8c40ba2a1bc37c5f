"""Global constants for the groupbuy application."""

# Group-related constants
MAX_MEMBERS = 3
GROUP_TTL_SECONDS = 24 * 60 * 60
JOIN_REDIRECT_DELAY = 0.6

# Session-related constants
SESSION_TOKEN_KEY = "storefront_token"  # nosec B105
SESSION_IDLE_TIMEOUT = 2 * 60 * 60
MAX_SESSIONS = 10_000

# Confirmation-related constants
ORDER_ID_PREFIX = "ORD-"
ORDER_ID_UPPER_BOUND = 1_000_000
FORMED_AT_FORMAT = "%Y-%m-%d %H:%M"
CONSULTANT_WECHAT_ID = "xy5312630"
CONSULTANT_NOTE = "添加时请备注“试听课”"

# Chat-related constants
GEMINI_MODEL = "gemini-3-flash-preview"
CHAT_TEMPERATURE = 0.7
CHAT_GREETING = (
    "同学你好！我是极致Essay的智能顾问。关于试听课拼团、导师背景或辅导内容，随时问我哦！✨"
)
CHAT_EMPTY_REPLY = "抱歉，我暂时无法回答这个问题，请联系人工客服。"
CHAT_TRANSPORT_ERROR = "网络连接异常，请稍后再试。"
CHAT_CONFIG_ERROR = "配置错误：缺少 API Key。"
CHAT_WIDGET_ERROR = "抱歉，网络开小差了，请稍后再试。"
