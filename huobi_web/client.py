import random
from decimal import Decimal
from urllib.parse import urljoin

from loguru import logger

from huobi_web.creds_retriever import get_creds
from huobi_web.domain import Depth, MyTradeInfo, TradeResult, Type
from huobi_web.exceptions import HUOBIClientException
from huobi_web.http_client import HttpClient
from huobi_web.value_readers import DelegationReader, JsonValueReader, LoginResultReader, VoidValueReader


class HUOBIClient(object):
    """Trades on the exchange through its web pages, the way a browser does."""

    ENCODING = 'UTF-8'

    HTTPS_BASE = 'https://www.huobi.com/'
    LOGIN_URI = urljoin(HTTPS_BASE, 'account/login.php')
    DEPTH_URI = 'http://market.huobi.com/market/depth.php'
    TRADE_URI = urljoin(HTTPS_BASE, 'trade/index.php')
    ACCOUNT_AJAX_URI = urljoin(HTTPS_BASE, 'account/ajax.php')
    CANCEL_REFERER_URI = urljoin(TRADE_URI, '?a=delegation')

    MIN_AMOUNT_PER_ORDER = Decimal('0.001')

    def __init__(self, email=None, password=None, socket_timeout=30, connect_timeout=10):
        self.http_client = HttpClient(socket_timeout=socket_timeout, connect_timeout=connect_timeout)
        self.email = email
        self.password = password

    @classmethod
    def from_creds(cls, creds=None):
        if creds is None:
            creds = get_creds()
        return cls(email=creds['email'], password=creds['password'],
                   socket_timeout=creds['socket_timeout'], connect_timeout=creds['connect_timeout'])

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def login(self):
        self._init_login_page()

        login_result = self.http_client.post(self.LOGIN_URI, LoginResultReader(),
                                             data={'email': self.email, 'password': self.password})
        logger.debug('Login result: {}', login_result)

        if login_result.error is not None:
            raise HUOBIClientException(login_result.error)
        return login_result

    def get_depth(self):
        params = {'a': 'marketdepth', 'random': str(random.random())}
        return self.http_client.get(self.DEPTH_URI, JsonValueReader(Depth), params=params)

    def get_funds(self):
        """
        :return: Funds shown on the account page, None when not logged in
        """
        login_result = self.http_client.get(self.HTTPS_BASE, LoginResultReader())
        return login_result.funds

    def get_my_trade_info(self):
        params = {'m': 'my_trade_info', 'r': str(random.random())}
        return self.http_client.get(self.ACCOUNT_AJAX_URI, JsonValueReader(MyTradeInfo), params=params)

    def get_min_amount_per_order(self):
        return self.MIN_AMOUNT_PER_ORDER

    def buy(self, price, amount):
        self._trade(Type.BUY, price, amount)

    def sell(self, price, amount):
        self._trade(Type.SELL, price, amount)

    def cancel(self, delegation_id):
        """Cancels the delegation with the given id.

        Returns nothing; call :meth:`get_delegations` for the ones left open.

        :raises HUOBIClientException: the exchange refused the cancel
        """
        params = [('a', 'cancel'), ('id', str(delegation_id))]
        self._post_trade(self.TRADE_URI, self.CANCEL_REFERER_URI, params)
        logger.info('Cancelled delegation {}', delegation_id)

    def get_delegations(self):
        return self.http_client.get(self.TRADE_URI, DelegationReader(), params={'a': 'delegation'})

    def close(self):
        self.http_client.close()

    def _trade(self, type, price, amount):
        params = [('a', str(type)),
                  ('trading', 'guding'),  # limit price
                  ('price', to_plain_string(price)),
                  ('amount', to_plain_string(amount))]
        self._post_trade(self.TRADE_URI, self.TRADE_URI, params)
        logger.info('Placed {} of {} at {}', type, amount, price)

    def _post_trade(self, trade_uri, referer, params):
        trade_result = self._execute_xml_request(trade_uri, referer, params, TradeResult)

        if trade_result.code != 0:
            logger.error('Trade request {} rejected: {}', dict(params).get('a'), trade_result)
            raise HUOBIClientException(trade_result.msg, trade_result.code)

    def _execute_xml_request(self, uri, referer, params, domain_class):
        logger.debug('Adding header Referer: {}', referer)
        headers = {'X-Requested-With': 'XMLHttpRequest',
                   'Referer': referer}
        return self.http_client.post(uri, JsonValueReader(domain_class), data=params, headers=headers)

    def _init_login_page(self):
        # the login post is refused without the landing page cookies
        self.http_client.get(self.HTTPS_BASE, VoidValueReader.get_instance())


def to_plain_string(value):
    return '{:f}'.format(Decimal(str(value)))


if __name__ == '__main__':
    with HUOBIClient.from_creds() as c:
        print(c.get_depth())
        c.login()
        print(c.get_funds())
        print(c.get_delegations())
