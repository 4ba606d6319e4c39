"""Exception raised when a game rule is broken."""


class CoupError(Exception):
    """An illegal game action: wrong turn, too few coins, a blocked move and so on."""