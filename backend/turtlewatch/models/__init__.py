"""
ORM models. Importing this package registers every table with Base.metadata.
"""

from turtlewatch.models.user import User
from turtlewatch.models.turtle import Turtle
from turtlewatch.models.survey_event import TurtleSurveyEvent
from turtlewatch.models.nest import TurtleNest
from turtlewatch.models.nest_event import TurtleNestEvent

__all__ = ["User", "Turtle", "TurtleSurveyEvent", "TurtleNest", "TurtleNestEvent"]
