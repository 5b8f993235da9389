import hashlib
import time
from urllib.parse import urlencode

from loguru import logger

from huobi_web.domain import AccountInfo, to_code
from huobi_web.exceptions import HUOBIClientException
from huobi_web.http_client import HttpClient
from huobi_web.value_readers import JsonValueReader

ACCOUNT_INFO = 'get_account_info'


def build_signature(params, secret_key):
    """MD5 of the key-sorted, url-encoded params with ``secret_key`` mixed in."""
    signed = dict(params)
    signed['secret_key'] = secret_key
    message = urlencode(sorted(signed.items()))
    return hashlib.md5(message.encode('utf-8')).hexdigest().lower()


class CheckedJsonValueReader(JsonValueReader):
    """Raises on ``{"code": <non-zero>, "msg": ...}`` bodies before mapping."""

    def read(self, response):
        data = self.read_json(response)
        code = to_code(data.get('code'))
        if code != 0:
            raise HUOBIClientException(data.get('msg') or data.get('message'), code)
        return self.domain_class.from_json(data)


class AccountService(object):
    """Account calls of the key-signed trade API."""

    API_URL = 'https://api.huobi.com/apiv3'

    def __init__(self, access_key, secret_key, api_url=API_URL, socket_timeout=30, connect_timeout=10):
        self.__access_key = access_key
        self.__secret_key = secret_key
        self.api_url = api_url
        self.http_client = HttpClient(socket_timeout=socket_timeout, connect_timeout=connect_timeout)

    def get_account_info(self):
        return self._request(ACCOUNT_INFO, AccountInfo)

    def close(self):
        self.http_client.close()

    def _request(self, method, domain_class):
        params = {'method': method,
                  'access_key': self.__access_key,
                  'created': str(self._next_created())}
        params['sign'] = build_signature(params, self.__secret_key)

        logger.debug('Calling API method {}', method)
        return self.http_client.post(self.api_url, CheckedJsonValueReader(domain_class), data=params)

    @staticmethod
    def _next_created():
        return int(time.time())
