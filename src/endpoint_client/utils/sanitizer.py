# src/endpoint_client/utils/sanitizer.py
"""
Утилита для маскирования чувствительных данных в логах.

Заголовки авторизации, токены и пароли не должны попадать в логи
в открытом виде.
"""

import re
from typing import Any, Dict, Iterable


# Список чувствительных полей (case-insensitive)
SENSITIVE_KEYS = {
    # Пароли
    'password', 'passwd', 'pwd',
    # Токены
    'token', 'access_token', 'refresh_token', 'auth_token', 'api_token', 'id_token',
    # Секреты и ключи
    'secret', 'client_secret', 'api_key', 'apikey', 'private_key',
    # Аутентификация
    'authorization', 'proxy-authorization', 'auth', 'credentials',
    # Сессии и куки
    'cookie', 'set-cookie', 'session', 'session_id', 'csrf_token', 'xsrf_token',
}

# Части имени, по которым заголовок считается чувствительным (x-http-token, x-api-key)
_SENSITIVE_PARTS = ('token', 'secret', 'password', 'api-key', 'api_key', 'auth')

SENSITIVE_PATTERNS = [
    # Bearer / Basic в значениях
    (re.compile(r'(Bearer\s+)([A-Za-z0-9\-._~+/]+=*)', re.IGNORECASE), r'\1***REDACTED***'),
    (re.compile(r'(Basic\s+)([A-Za-z0-9+/]+=*)', re.IGNORECASE), r'\1***REDACTED***'),
    # Параметры в query string
    (re.compile(r'((?:api[_-]?key|token|password)=)([^\s&,;]+)', re.IGNORECASE), r'\1***REDACTED***'),
]


def _is_sensitive_key(key: str) -> bool:
    key_lower = key.lower()
    if key_lower in SENSITIVE_KEYS:
        return True
    return any(part in key_lower for part in _SENSITIVE_PARTS)


def mask_sensitive_data(data: Any, mask: str = "***REDACTED***") -> Any:
    """
    Рекурсивно маскирует чувствительные данные в словарях, списках, строках.

    Returns:
        Копия данных с замаскированными чувствительными полями

    Examples:
        >>> mask_sensitive_data({"x-http-token": "abc", "Content-Type": "application/json"})
        {'x-http-token': '***REDACTED***', 'Content-Type': 'application/json'}

        >>> mask_sensitive_data("objects?token=abc&page=1")
        'objects?token=***REDACTED***&page=1'
    """
    if data is None or isinstance(data, (bool, int, float)):
        return data

    if isinstance(data, str):
        for pattern, replacement in SENSITIVE_PATTERNS:
            data = pattern.sub(replacement, data)
        return data

    if isinstance(data, dict):
        result: Dict[Any, Any] = {}
        for key, value in data.items():
            if _is_sensitive_key(str(key)):
                result[key] = mask
            else:
                result[key] = mask_sensitive_data(value, mask)
        return result

    if isinstance(data, (list, tuple)):
        return type(data)(mask_sensitive_data(item, mask) for item in data)

    return data


def add_sensitive_keys(keys: Iterable[str]) -> None:
    """Добавить пользовательские ключи к списку чувствительных."""
    SENSITIVE_KEYS.update(key.lower() for key in keys)
