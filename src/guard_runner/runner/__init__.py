"""Task orchestration for registered guards.

The runner decides which guards a request reaches, which task method each
guard is asked to perform, and how far a single guard's failure travels:

- Generic faults are always contained at the guard: the guard is logged,
  removed from the registry for good, and its siblings keep running.
- A deliberate ``TaskFailed`` stops at the guard unless the guard's named
  group sets ``halt_on_fail``; then it unwinds to the group boundary and the
  rest of that group is skipped for the current call.
- ``NotImplementedError`` is not a failure at all. It only drives fallback
  selection between change tasks.

Execution is single-threaded and sequential, in registry order.
"""
