"""
Article retrieval from the Qiita API.
"""

from .qiita import QiitaClient

__all__ = ["QiitaClient"]
