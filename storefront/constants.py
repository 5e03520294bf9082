# persistent storage keys (durable tier unless noted)
CART_KEY = "cart"
CART_VISIBLE_KEY = "cartVisible"
USER_KEY = "user"  # also used by the tab tier
REMEMBER_ME_KEY = "rememberMe"

DEFAULT_ROLE = "customer"

LOGIN_PATH = "/auth/login"
LOGIN_SUCCESS = "登录成功"

# notification texts
MSG_LOGIN_SUCCESS = "登录成功"
MSG_LOGIN_FAILED = "登录失败"
MSG_LOGIN_FAILED_PREFIX = "登录失败："
MSG_UNKNOWN_ERROR = "未知错误"
MSG_REQUEST_FAILED = "请求失败"
MSG_LOGIN_REQUIRED = "请先登录"
MSG_OUT_OF_STOCK = "商品库存不足"
MSG_MAX_STOCK = "已达到最大库存数量"
MSG_ADDED = "已添加到购物车"
MSG_REMOVED = "已从购物车移除"

DYNAMIC_IMPORT_FAILURE = "Failed to fetch dynamically imported module"
