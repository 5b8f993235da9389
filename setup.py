from setuptools import setup, find_packages
from huobi_web import __version__

setup(
    name='huobi-web',
    version=__version__,
    description='huobi web client: login, depth, funds, trading and delegations over the site pages',
    include_package_data=True,
    packages=find_packages(),
    install_requires=[
        'requests>=2.18.4',
        'pandas[html]>=1.5',
        'lxml',
        'loguru'],
    extras_require={
        'test': ['pytest']})
