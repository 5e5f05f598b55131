"""
Email Scheduler Test Suite.

- Entity and serialization tests
- Store (persistence) tests
- Validation rule tests
- Dispatcher tick and loop tests
- Service (schedule / list) tests
"""
