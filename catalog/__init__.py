"""
카탈로그 관리 API
상품, 옵션(변형), 카테고리, 재고, 할인 가격을 관리하는 REST 서비스
"""

__version__ = "1.0.0"
