from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from huobi_web.client import HUOBIClient, to_plain_string
from huobi_web.domain import Funds, Type
from huobi_web.exceptions import HUOBIClientException, HUOBIAPIException, HUOBIRequestException
from huobi_web.test.pages import make_response, ACCOUNT_PAGE, ANONYMOUS_PAGE, LOGIN_ERROR_PAGE, DELEGATION_PAGE


@pytest.fixture
def client():
    c = HUOBIClient('trader@example.com', 'secret', socket_timeout=5, connect_timeout=2)
    c.http_client.session = MagicMock()
    return c


def test_uris():
    assert HUOBIClient.LOGIN_URI == 'https://www.huobi.com/account/login.php'
    assert HUOBIClient.TRADE_URI == 'https://www.huobi.com/trade/index.php'
    assert HUOBIClient.ACCOUNT_AJAX_URI == 'https://www.huobi.com/account/ajax.php'
    assert HUOBIClient.CANCEL_REFERER_URI == 'https://www.huobi.com/trade/index.php?a=delegation'


def test_login_visits_landing_page_first(client):
    session = client.http_client.session
    session.get.return_value = make_response(ANONYMOUS_PAGE)
    session.post.return_value = make_response(ACCOUNT_PAGE)

    result = client.login()

    assert result.is_success
    assert result.funds.available_cny == Decimal('1024.50')
    session.get.assert_called_once_with('https://www.huobi.com/', timeout=(2, 5), params=None)
    args, kwargs = session.post.call_args
    assert args == ('https://www.huobi.com/account/login.php',)
    assert kwargs['data'] == {'email': 'trader@example.com', 'password': 'secret'}


def test_login_error_raises(client):
    session = client.http_client.session
    session.get.return_value = make_response(ANONYMOUS_PAGE)
    session.post.return_value = make_response(LOGIN_ERROR_PAGE)

    with pytest.raises(HUOBIClientException) as e:
        client.login()
    assert e.value.message == 'Wrong email or password'


def test_get_depth(client):
    session = client.http_client.session
    session.get.return_value = make_response({'asks': [[4501.5, 0.2], [4502, 1]], 'bids': [[4499, 3.5]]})

    depth = client.get_depth()

    assert depth.asks == [(Decimal('4501.5'), Decimal('0.2')), (Decimal('4502'), Decimal('1'))]
    assert depth.bids == [(Decimal('4499'), Decimal('3.5'))]
    args, kwargs = session.get.call_args
    assert args == ('http://market.huobi.com/market/depth.php',)
    assert kwargs['params']['a'] == 'marketdepth'
    assert 0 <= float(kwargs['params']['random']) < 1


def test_get_funds(client):
    client.http_client.session.get.return_value = make_response(ACCOUNT_PAGE)

    funds = client.get_funds()

    assert funds == Funds(total=Decimal('12345.67'), net_asset=Decimal('12000.00'),
                          available_cny=Decimal('1024.50'), available_btc=Decimal('1.2345'),
                          frozen_cny=Decimal('0.00'), frozen_btc=Decimal('0.5'),
                          loan_cny=Decimal('0'), loan_btc=Decimal('0'))


def test_get_funds_anonymous(client):
    client.http_client.session.get.return_value = make_response(ANONYMOUS_PAGE)

    assert client.get_funds() is None


def test_get_my_trade_info(client):
    session = client.http_client.session
    session.get.return_value = make_response({'total': '100.5', 'net_asset': '90', 'available_cny': '10',
                                              'available_btc': '0.01', 'frozen_cny': '0', 'frozen_btc': '0',
                                              'loan_cny': '10.5', 'loan_btc': '0'})

    info = client.get_my_trade_info()

    assert info.total == Decimal('100.5')
    assert info.funds.loan_cny == Decimal('10.5')
    args, kwargs = session.get.call_args
    assert args == ('https://www.huobi.com/account/ajax.php',)
    assert kwargs['params']['m'] == 'my_trade_info'
    assert 'r' in kwargs['params']


def test_min_amount_per_order(client):
    assert client.get_min_amount_per_order() == Decimal('0.001')


def test_buy_posts_xhr_limit_order(client):
    session = client.http_client.session
    session.post.return_value = make_response({'code': 0, 'msg': ''})

    client.buy(Decimal('4500.10'), Decimal('1E-3'))

    args, kwargs = session.post.call_args
    assert args == ('https://www.huobi.com/trade/index.php',)
    assert kwargs['data'] == [('a', 'buy'), ('trading', 'guding'), ('price', '4500.10'), ('amount', '0.001')]
    assert kwargs['headers'] == {'X-Requested-With': 'XMLHttpRequest',
                                 'Referer': 'https://www.huobi.com/trade/index.php'}


def test_sell_rejected(client):
    client.http_client.session.post.return_value = make_response({'code': 2, 'msg': 'Insufficient balance'})

    with pytest.raises(HUOBIClientException) as e:
        client.sell('4600', '2')
    assert e.value.code == 2
    assert e.value.message == 'Insufficient balance'


def test_cancel(client):
    session = client.http_client.session
    session.post.return_value = make_response({'code': 0})

    assert client.cancel(1001) is None

    args, kwargs = session.post.call_args
    assert kwargs['data'] == [('a', 'cancel'), ('id', '1001')]
    assert kwargs['headers']['Referer'] == 'https://www.huobi.com/trade/index.php?a=delegation'


def test_cancel_rejected(client):
    client.http_client.session.post.return_value = make_response({'code': 41, 'msg': 'Delegation not found'})

    with pytest.raises(HUOBIClientException):
        client.cancel(1)


def test_get_delegations(client):
    session = client.http_client.session
    session.get.return_value = make_response(DELEGATION_PAGE)

    delegations = client.get_delegations()

    assert [d.id for d in delegations] == [1001, 1002]
    assert delegations[0].type == Type.BUY
    assert delegations[0].price == Decimal('4500.00')
    assert delegations[0].remaining_amount == Decimal('0.4')
    assert delegations[1].type == Type.SELL
    session.get.assert_called_once_with('https://www.huobi.com/trade/index.php', timeout=(2, 5),
                                        params={'a': 'delegation'})


def test_http_error_raises(client):
    client.http_client.session.get.return_value = make_response('gateway down', status_code=502)

    with pytest.raises(HUOBIAPIException) as e:
        client.get_depth()
    assert e.value.status_code == 502


def test_context_manager_closes_session():
    with HUOBIClient() as c:
        session = c.http_client.session = MagicMock()
    session.close.assert_called_once_with()


def test_from_creds():
    c = HUOBIClient.from_creds({'email': 'a@b.c', 'password': 'pw', 'socket_timeout': 3.0,
                                'connect_timeout': 1.0})
    assert c.email == 'a@b.c'
    assert c.http_client.socket_timeout == 3.0
    c.close()


def test_to_plain_string():
    assert to_plain_string(Decimal('1E+2')) == '100'
    assert to_plain_string('0.00010') == '0.00010'


def test_trade_with_null_code_succeeds(client):
    client.http_client.session.post.return_value = make_response({'code': None, 'msg': 'x'})

    client.buy('1', '1')


def test_trade_with_garbage_code_raises(client):
    client.http_client.session.post.return_value = make_response({'code': 'oops', 'msg': 'x'})

    with pytest.raises(HUOBIRequestException):
        client.sell('1', '1')
