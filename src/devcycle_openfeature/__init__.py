"""
devcycle_openfeature – DevCycle provider for the OpenFeature evaluation contract.

Import path convention::

    from devcycle_openfeature.kernel.values import Value
    from devcycle_openfeature.kernel.context import EvaluationContext
    from devcycle_openfeature.application.devcycle import DevCycleProvider
    from devcycle_openfeature.testing.fakes import FakeDevCycleClientFactory
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
