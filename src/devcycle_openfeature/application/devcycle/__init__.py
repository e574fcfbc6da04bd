"""DevCycle provider – context mapping, JSON codec, results and lifecycle."""
from devcycle_openfeature.application.devcycle.client import DevCycleClient, DevCycleClientFactory
from devcycle_openfeature.application.devcycle.codec import dict_to_value, value_to_dict
from devcycle_openfeature.application.devcycle.mapper import (
    convert_to_custom_data,
    resolve_user_id,
    unwrap_values,
    user_from_context,
)
from devcycle_openfeature.application.devcycle.options import (
    DEFAULT_BASE_URL,
    DevCycleOptions,
    DevCycleSettings,
)
from devcycle_openfeature.application.devcycle.provider import PROVIDER_NAME, DevCycleProvider
from devcycle_openfeature.application.devcycle.results import (
    build_evaluation,
    default_evaluation,
    eval_reason,
    flag_metadata,
)
from devcycle_openfeature.application.devcycle.user import (
    DevCycleUser,
    DevCycleUserBuilder,
    UserBuildError,
)
from devcycle_openfeature.application.devcycle.variable import EvalReason, Variable

__all__ = [
    "DEFAULT_BASE_URL",
    "PROVIDER_NAME",
    "DevCycleClient",
    "DevCycleClientFactory",
    "DevCycleOptions",
    "DevCycleProvider",
    "DevCycleSettings",
    "DevCycleUser",
    "DevCycleUserBuilder",
    "EvalReason",
    "UserBuildError",
    "Variable",
    "build_evaluation",
    "convert_to_custom_data",
    "default_evaluation",
    "dict_to_value",
    "eval_reason",
    "flag_metadata",
    "resolve_user_id",
    "unwrap_values",
    "user_from_context",
    "value_to_dict",
]
