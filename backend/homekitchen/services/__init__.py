"""Services Layer — imperative shell around the pure core.

Invariants:
    - Services sequence IO (read, conditional write, commit, dispatch) around core rules
    - Services never build HTTP responses; routes never contain business rules

Design Decisions:
    - One class per component (order lifecycle, subscription workflow, delivery quotes),
      each constructed per request with the request's AsyncSession
"""
