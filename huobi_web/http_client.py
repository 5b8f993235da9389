import requests
from loguru import logger

from huobi_web.exceptions import HUOBIAPIException


class HttpClient(object):
    """Browser-like requests session shared by every call of a client.

    The session keeps the cookie jar, so a login done through it
    authenticates the following requests.
    """

    HEADERS = {'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,application/json,*/*;q=0.8',
               'Accept-Charset': 'UTF-8',
               'User-Agent': 'Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) '
                             'Chrome/67.0.3396.62 Safari/537.36',
               'Cache-Control': 'max-age=0'}

    def __init__(self, socket_timeout=30, connect_timeout=10):
        self.socket_timeout = socket_timeout
        self.connect_timeout = connect_timeout
        self.session = self._init_session()

    def _init_session(self):
        session = requests.session()
        session.headers.update(self.HEADERS)
        return session

    def get(self, uri, reader, params=None):
        return self.execute('get', uri, reader, params=params)

    def post(self, uri, reader, data, headers=None):
        return self.execute('post', uri, reader, data=data, headers=headers)

    def execute(self, method, uri, reader, **kwargs):
        logger.debug('{} {}', method.upper(), uri)
        f = getattr(self.session, method)
        response = f(uri, timeout=(self.connect_timeout, self.socket_timeout), **kwargs)
        return reader.read(self._handle_response(response))

    @staticmethod
    def _handle_response(response):
        if not str(response.status_code).startswith('2'):
            raise HUOBIAPIException(response)
        # pages are served as UTF-8, often without a charset
        if 'charset' not in response.headers.get('Content-Type', ''):
            response.encoding = 'UTF-8'
        return response

    def close(self):
        self.session.close()
