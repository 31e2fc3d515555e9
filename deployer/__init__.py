"""
Deployer Package
Signer, shared script context, soft verification and the exit-code runner
"""

from .wallet_manager import WalletManager
from .context import DeploymentContext, create_context
from .runner import run
from .verification import verify_expected

__all__ = ['WalletManager', 'DeploymentContext', 'create_context', 'run', 'verify_expected']
