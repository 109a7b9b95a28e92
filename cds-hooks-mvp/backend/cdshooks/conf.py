"""
CDS_HOOKS 配置读取。

settings.CDS_HOOKS 里没写的 key 用 DEFAULTS 兜底，测试里可以用
override_settings(CDS_HOOKS={...}) 只覆盖一部分。
"""

from django.conf import settings

DEFAULTS = {
    # 未带 Authorization 时是否直接拒绝；False 时使用 DEFAULT_CREDENTIAL
    'REQUIRE_AUTH': False,
    'DEFAULT_CREDENTIAL': 'Bearer open-access',
    'TOKEN_VERIFIER': 'cdshooks.authentication.accept_any_token',
    'PORT': 3000,
}


def hooks_setting(name):
    return getattr(settings, 'CDS_HOOKS', {}).get(name, DEFAULTS[name])
