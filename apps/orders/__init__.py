"""
Orders App - Swipe Request Lifecycle

A request is one buyer's claim against one post. This app owns the
request state machine, the atomic transition runner, and the append-only
audit trail of every transition attempt.

Architecture:
- Models: SwipeRequest, RequestStatus, RequestAction, AuditLogEntry
- State machine: state_machine.apply() (pure, table driven)
- Services: request_management, transitions, audit
- Signals: request_transitioned (consumed by notifications)
"""
