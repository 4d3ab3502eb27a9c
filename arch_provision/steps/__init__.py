from .install import install_workflow
from .post_install import post_install_workflow

__all__ = [
    "install_workflow",
    "post_install_workflow",
]
