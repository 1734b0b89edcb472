"""stest - filter a list of files by their properties.

stest takes a list of files and filters them by properties, analogous to
test(1). Files which pass all enabled tests are printed to stdout.
"""

from stest.core.constants import STEST_VERSION

__version__ = STEST_VERSION
