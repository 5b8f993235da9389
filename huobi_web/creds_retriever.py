import os

import configparser as ConfigParser

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '.'))

SECTION = 'huobi'
KEYS = ('email', 'password', 'access_key', 'secret_key', 'socket_timeout', 'connect_timeout')
DEFAULTS = {'socket_timeout': '30', 'connect_timeout': '10'}


def get_creds(path=None):
    """Read account settings from ``settings.ini`` (section ``[huobi]``).

    The file defaults to the one next to this module, ``HUOBI_SETTINGS``
    points elsewhere, and every key can be overridden by ``HUOBI_<KEY>``.
    Timeouts come back as floats, missing keys as None.
    """
    if path is None:
        path = os.environ.get('HUOBI_SETTINGS', os.path.join(BASE_DIR, 'settings.ini'))

    config = ConfigParser.ConfigParser()
    config.read(path)

    creds = {}
    for key in KEYS:
        value = os.environ.get('HUOBI_' + key.upper())
        if value is None:
            value = config.get(SECTION, key, fallback=DEFAULTS.get(key))
        creds[key] = value

    for key in ('socket_timeout', 'connect_timeout'):
        creds[key] = float(creds[key])

    return creds
