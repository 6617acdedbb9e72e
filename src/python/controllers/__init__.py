"""Controllers package for SlowFast.

Usage:
    from controllers import ApplicationController

    controller = ApplicationController(context)
    controller.set_view(view)
"""

from controllers.application_controller import ApplicationController

__all__ = ['ApplicationController']
