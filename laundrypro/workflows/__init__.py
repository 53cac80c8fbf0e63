from laundrypro.workflows.auth_flow import AuthFlowController
from laundrypro.workflows.profile_flow import ProfileController

__all__ = ["AuthFlowController", "ProfileController"]
