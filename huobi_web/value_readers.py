from io import StringIO
from urllib.parse import urlparse, parse_qs

import lxml.html
from lxml.etree import ParserError
from loguru import logger
from pandas import read_html, to_datetime

from huobi_web.domain import Funds, LoginResult, Delegation, Type, to_decimal
from huobi_web.exceptions import HUOBIRequestException


class ValueReader(object):

    def read(self, response):
        raise NotImplementedError


class VoidValueReader(ValueReader):

    _instance = None

    @classmethod
    def get_instance(cls):
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def read(self, response):
        return None


class JsonValueReader(ValueReader):

    def __init__(self, domain_class):
        self.domain_class = domain_class

    def read(self, response):
        return self.domain_class.from_json(self.read_json(response))

    def read_json(self, response):
        try:
            data = response.json()
        except ValueError:
            raise HUOBIRequestException('Invalid Response: %s' % response.text)
        if not isinstance(data, dict):
            raise HUOBIRequestException('Unexpected JSON for {}: {}'.format(self.domain_class.__name__,
                                                                             response.text))
        return data


class LoginResultReader(ValueReader):
    """Reads the funds block and the login error off an account page.

    Funds figures are the elements whose id matches a :class:`Funds` field,
    the error is the first element classed ``login_error`` or ``error``.
    """

    ERROR_XPATH = '//*[contains(concat(" ", normalize-space(@class), " "), " login_error ")' \
                  ' or contains(concat(" ", normalize-space(@class), " "), " error ")]'

    def read(self, response):
        try:
            doc = lxml.html.fromstring(response.text)
        except ParserError:
            # empty document
            return LoginResult()

        return LoginResult(funds=self._read_funds(doc), error=self._read_error(doc))

    @staticmethod
    def _read_funds(doc):
        values = {}
        for field in Funds.FIELDS:
            nodes = doc.xpath('//*[@id=$id]', id=field)
            if nodes:
                values[field] = to_decimal(nodes[0].text_content())

        if not values:
            return None
        return Funds(**values)

    def _read_error(self, doc):
        for node in doc.xpath(self.ERROR_XPATH):
            text = node.text_content().strip()
            if text:
                return text
        return None


class DelegationReader(ValueReader):
    """Reads the open delegations table (``<table id="delegation">``).

    Columns: time, type, price, amount, traded amount, traded money, status
    and the action cell holding the ``?a=cancel&id=<id>`` link.
    """

    TABLE_ID = 'delegation'

    def read(self, response):
        try:
            tables = read_html(StringIO(response.text), attrs={'id': self.TABLE_ID}, extract_links='body')
        except ValueError:
            # no delegation table on the page
            return []

        delegations = []
        for row in tables[0].itertuples(index=False):
            cells = [cell if isinstance(cell, tuple) else (cell, None) for cell in row]
            if len(cells) < 8:
                continue
            delegation_id = self._cancel_id(cells[7][1])
            if delegation_id is None:
                continue
            try:
                delegation_type = Type.parse(cells[1][0])
            except ValueError:
                logger.warning('Skipping delegation {} with unknown type {!r}', delegation_id, cells[1][0])
                continue

            delegations.append(Delegation(id=delegation_id,
                                          time=to_datetime(cells[0][0]).to_pydatetime(),
                                          type=delegation_type,
                                          price=to_decimal(cells[2][0]),
                                          amount=to_decimal(cells[3][0]),
                                          traded_amount=to_decimal(cells[4][0]),
                                          traded_money=to_decimal(cells[5][0]),
                                          status=str(cells[6][0]).strip()))
        return delegations

    @staticmethod
    def _cancel_id(link):
        if not link:
            return None
        ids = parse_qs(urlparse(link).query).get('id')
        if not ids:
            return None
        return int(ids[0])
