"""Regression tests pinning evaluation traces.

Each test asserts the full serialized history of a rule tree so that
changes to trace order, trace length or combinator policy show up as
failures:
- Documented evaluation scenarios
- Combined ALL + ANY nodes
- Non-short-circuit combinators
"""
