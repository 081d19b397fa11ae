from payreturn_core.config import CoreConfig, load_core_config
from payreturn_core.home import PayReturnPaths, ensure_payreturn_layout, resolve_payreturn_home
from payreturn_core.returnpage.renderer import ReturnPageOptions, render_return_page
from payreturn_core.returnpage.status import PaymentStatus

__version__ = "0.1.0"

__all__ = [
    "CoreConfig",
    "PayReturnPaths",
    "PaymentStatus",
    "ReturnPageOptions",
    "__version__",
    "ensure_payreturn_layout",
    "load_core_config",
    "render_return_page",
    "resolve_payreturn_home",
]
