from decimal import Decimal
from enum import Enum

from huobi_web.exceptions import HUOBIRequestException


def to_code(value):
    if value is None or value == '':
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        raise HUOBIRequestException('Invalid result code: {!r}'.format(value))


def to_decimal(value):
    if value is None or value == '':
        return None
    return Decimal(str(value).replace(',', '').strip())


class Type(Enum):
    BUY = 'buy'
    SELL = 'sell'

    def __str__(self):
        return self.value

    @classmethod
    def parse(cls, label):
        """Accepts suffixed site labels too, e.g. ``买入(限价)``."""
        label = str(label).strip().lower()
        if label.startswith(('buy', '买')):
            return cls.BUY
        if label.startswith(('sell', '卖')):
            return cls.SELL
        raise ValueError('Unknown delegation type: {}'.format(label))


class Depth(object):

    def __init__(self, asks, bids):
        self.asks = asks
        self.bids = bids

    @classmethod
    def from_json(cls, data):
        return cls(asks=cls._levels(data.get('asks', [])),
                   bids=cls._levels(data.get('bids', [])))

    @staticmethod
    def _levels(rows):
        levels = []
        for row in rows:
            if isinstance(row, dict):
                levels.append((to_decimal(row['price']), to_decimal(row['amount'])))
            else:
                levels.append((to_decimal(row[0]), to_decimal(row[1])))
        return levels

    def __repr__(self):
        return 'Depth(asks={}, bids={})'.format(self.asks, self.bids)


class Funds(object):

    FIELDS = ('total', 'net_asset', 'available_cny', 'available_btc', 'frozen_cny', 'frozen_btc',
              'loan_cny', 'loan_btc')

    def __init__(self, total=None, net_asset=None, available_cny=None, available_btc=None,
                 frozen_cny=None, frozen_btc=None, loan_cny=None, loan_btc=None):
        self.total = total
        self.net_asset = net_asset
        self.available_cny = available_cny
        self.available_btc = available_btc
        self.frozen_cny = frozen_cny
        self.frozen_btc = frozen_btc
        self.loan_cny = loan_cny
        self.loan_btc = loan_btc

    @classmethod
    def from_json(cls, data):
        return cls(**{field: to_decimal(data.get(field)) for field in cls.FIELDS})

    def __eq__(self, other):
        return isinstance(other, Funds) and \
               all(getattr(self, f) == getattr(other, f) for f in self.FIELDS)

    def __repr__(self):
        return 'Funds({})'.format(', '.join('{}={}'.format(f, getattr(self, f)) for f in self.FIELDS))


class LoginResult(object):

    def __init__(self, funds=None, error=None):
        self.funds = funds
        self.error = error

    @property
    def is_success(self):
        return self.error is None and self.funds is not None

    def __repr__(self):
        return 'LoginResult(funds={}, error={})'.format(self.funds, self.error)


class MyTradeInfo(Funds):
    """Account summary returned by the account ajax endpoint.

    Carries the same figures as the funds block of the account page.
    """

    @classmethod
    def from_json(cls, data):
        # some responses wrap the payload in {"code": 0, "data": {...}}
        if isinstance(data.get('data'), dict):
            data = data['data']
        return super().from_json(data)

    @property
    def funds(self):
        return Funds(**{field: getattr(self, field) for field in self.FIELDS})

    def __repr__(self):
        return 'MyTradeInfo({})'.format(', '.join('{}={}'.format(f, getattr(self, f)) for f in self.FIELDS))


class TradeResult(object):

    def __init__(self, code, msg=None):
        self.code = code
        self.msg = msg

    @classmethod
    def from_json(cls, data):
        return cls(code=to_code(data.get('code')), msg=data.get('msg'))

    def __repr__(self):
        return 'TradeResult(code={}, msg={})'.format(self.code, self.msg)


class Delegation(object):

    def __init__(self, id, time, type, price, amount, traded_amount, traded_money, status):
        self.id = id
        self.time = time
        self.type = type
        self.price = price
        self.amount = amount
        self.traded_amount = traded_amount
        self.traded_money = traded_money
        self.status = status

    @property
    def remaining_amount(self):
        return self.amount - (self.traded_amount or Decimal('0'))

    def __repr__(self):
        return 'Delegation(id={}, time={}, type={}, price={}, amount={}, traded_amount={}, ' \
               'traded_money={}, status={})'.format(self.id, self.time, self.type, self.price, self.amount,
                                                    self.traded_amount, self.traded_money, self.status)


class AccountInfo(object):

    CURRENCIES = ('cny', 'btc', 'ltc')

    def __init__(self, total, net_asset, available, frozen, loan):
        self.total = total
        self.net_asset = net_asset
        self.available = available
        self.frozen = frozen
        self.loan = loan

    @classmethod
    def from_json(cls, data):
        def by_currency(prefix):
            return {c: to_decimal(data.get('{}_{}_display'.format(prefix, c))) for c in cls.CURRENCIES}

        return cls(total=to_decimal(data.get('total')),
                   net_asset=to_decimal(data.get('net_asset')),
                   available=by_currency('available'),
                   frozen=by_currency('frozen'),
                   loan=by_currency('loan'))

    def __repr__(self):
        return 'AccountInfo(total={}, net_asset={}, available={}, frozen={}, loan={})'.format(
            self.total, self.net_asset, self.available, self.frozen, self.loan)
