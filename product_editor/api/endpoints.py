"""
@PURPOSE: 卖家后台 API 端点路径常量
@OUTLINE:
  - 参考数据端点: 类目、税率、品牌、颜色、尺码、材质、图案、单位、国家、标签、质保、属性
  - 商品端点: 获取商品详情、更新商品
@GOTCHAS:
  - 路径均相对于 ApiConfig.api_prefix（默认 /api）
  - 类目接口返回的是 HTML <option> 片段, 不是 JSON 列表
@RELATED: client.py
"""

SELLER_CATEGORIES = "/categories/seller_categories"
TAXES = "/products/taxes"
BRANDS = "/products/brands/get"
COLORS = "/products/colors"
SIZES = "/products/sizes"
MATERIALS = "/products/materials"
PATTERNS = "/products/patterns"
UNITS = "/units/get"
COUNTRIES = "/countries/active"
TAGS = "/products/tags"
WARRANTIES = "/products/warranties/get"
ATTRIBUTES = "/products/attributes"

GET_PRODUCT_BY_ID = "/products/edit/{product_id}"
UPDATE_PRODUCT = "/products/update"

# 质保列表一次取全
WARRANTY_LIMIT = 1000
