"""
Exceptions raised by walletview.

Malformed input payloads raise InvalidTransaction. Failures of the wallet or
chain collaborators raise CollaboratorUnavailable subclasses, which the status
engine turns into an indeterminate status instead of propagating.
"""


class WalletViewError(Exception):
    """Base class for walletview errors"""


class InvalidTransaction(WalletViewError, ValueError):
    """Raised when a transaction payload cannot be loaded."""

    def __init__(self, message: str, tx_hash: str = None):
        self.tx_hash = tx_hash
        full_message = f"{message} (tx {tx_hash})" if tx_hash else message
        super().__init__(full_message)


class CollaboratorUnavailable(WalletViewError):
    """A wallet or chain query could not be answered."""


class ChainUnavailable(CollaboratorUnavailable):
    pass


class WalletUnavailable(CollaboratorUnavailable):
    pass
