# Routes package init
"""
TurtleWatch Backend - API Routes Package
=========================================

What:  HTTP route handlers that accept requests and return envelopes.
How:   One module per resource; each exposes an APIRouter.

Route Inventory:
    - users.py:          POST /api/users/register, POST /api/users/login,
                         GET  /api/users
    - turtles.py:        POST /api/turtles/create, GET /api/turtles,
                         GET  /api/turtles/{id}, PUT /api/turtles/{id}/update,
                         GET  /api/turtles/{id}/survey_events
    - survey_events.py:  POST /api/turtle_survey_events/create
    - nests.py:          POST /api/nests/create, GET /api/nests,
                         GET  /api/nests/{nest_code}, PUT /api/nests/{id}/update
    - nest_events.py:    POST /api/nest-events/create,
                         GET  /api/nest-events/{nest_code},
                         PUT  /api/nest-events/{id}
    - health.py:         GET  /api/test, GET /health

Design Principle:
    Routes are THIN. They take the validated body, call one service method
    and wrap the result as {"message": ..., "<entity>": ...}. Failures are
    raised by services and rendered by the handlers in main.py.
"""
