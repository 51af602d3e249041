# Services package init
"""
TurtleWatch Backend - Services Layer
=====================================

What:  Business rules between routes (HTTP) and models (persistence).
How:   Each service takes the request's AsyncSession plus a validated
       payload, enforces required fields and allowed values, and raises
       TurtleWatchError subclasses. The session dependency commits or
       rolls back the whole request.

Service Inventory:
    - UserService:         register, login, listing
    - TurtleService:       turtle CRUD and survey-event listing
    - SurveyEventService:  survey-event creation
    - NestService:         nest CRUD keyed by nest_code
    - NestEventService:    nest-event logging, listing and overwrite
    - validation / db_errors: shared field checks and IntegrityError
      classification
"""
