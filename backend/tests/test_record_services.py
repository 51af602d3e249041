"""
TurtleWatch Backend - Turtle / Nest / Event Service Unit Tests
===============================================================

What:  Business rules of the record services against a mocked session:
       normalization, defaults, and "nothing written" on failed lookups.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from turtlewatch.exceptions import ConflictError, NotFoundError, ValidationError
from turtlewatch.schemas.nest import NestRequest
from turtlewatch.schemas.nest_event import NestEventCreateRequest, NestEventUpdateRequest
from turtlewatch.schemas.survey_event import SurveyEventCreateRequest
from turtlewatch.schemas.turtle import TurtleCreateRequest, TurtleUpdateRequest
from turtlewatch.services.nest_event_service import NestEventService
from turtlewatch.services.nest_service import NestService, nest_values
from turtlewatch.services.survey_event_service import SurveyEventService
from turtlewatch.services.turtle_service import TurtleService

MEASUREMENTS = {
    "scl_max": 98.5,
    "scl_min": 96.0,
    "scw": 80.2,
    "ccl_max": 104.0,
    "ccl_min": 101.5,
    "ccw": 92.3,
    "tail_length_pl_vent": 12.0,
    "tail_length_vent_tip": 8.5,
    "tail_length_pl_tip": 20.5,
}


class FakeDriverError(Exception):
    def __init__(self, sqlstate, constraint_name=None):
        super().__init__("driver error")
        self.sqlstate = sqlstate
        self.constraint_name = constraint_name


def lookup_returns(session, row):
    result = MagicMock()
    result.scalar_one_or_none.return_value = row
    result.one_or_none.return_value = row
    session.execute.return_value = result


def nest_request(**overrides):
    data = {
        "nest_code": "N-001",
        "depth_top_egg_h": 35.0,
        "distance_to_sea_s": 22.5,
        "gps_lat": 37.0,
        "gps_long": 21.6,
        "date_found": "2025-06-14",
        "beach": "Kyparissia",
    }
    data.update(overrides)
    return NestRequest(**data)


class TestTurtleService:

    def setup_method(self):
        self.service = TurtleService()

    @pytest.mark.asyncio
    async def test_create_rejects_invalid_sex(self, mock_db_session):
        payload = TurtleCreateRequest(
            species="Caretta caretta", health_condition="ok", sex="xyz", **MEASUREMENTS
        )
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create(mock_db_session, payload)

        assert exc_info.value.field == "sex"
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_requires_measurements(self, mock_db_session):
        payload = TurtleCreateRequest(species="Caretta caretta", health_condition="ok")
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create(mock_db_session, payload)

        assert "scl_max" in exc_info.value.message
        assert "tail_length_pl_tip" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_update_unknown_turtle_writes_nothing(self, mock_db_session):
        lookup_returns(mock_db_session, None)
        payload = TurtleUpdateRequest(health_condition="injured", **MEASUREMENTS)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.update(mock_db_session, 999, payload)

        assert exc_info.value.message == "Turtle '999' not found"
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_list_survey_events_unknown_turtle(self, mock_db_session):
        lookup_returns(mock_db_session, None)

        with pytest.raises(NotFoundError):
            await self.service.list_survey_events(mock_db_session, 42)


class TestSurveyEventService:

    def setup_method(self):
        self.service = SurveyEventService()

    @pytest.mark.asyncio
    async def test_missing_observer(self, mock_db_session):
        payload = SurveyEventCreateRequest(
            event_type="nesting", location="B", turtle_id=1,
            health_condition="ok", **MEASUREMENTS,
        )
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create(mock_db_session, payload)

        assert exc_info.value.message == "Missing required fields: observer"

    @pytest.mark.asyncio
    async def test_unknown_turtle_foreign_key(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError(
                "INSERT", {}, FakeDriverError("23503", "fk_turtle_survey_events_turtle_id")
            )
        )
        payload = SurveyEventCreateRequest(
            event_type="nesting", location="B", turtle_id=404,
            health_condition="ok", observer="obs", **MEASUREMENTS,
        )

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.create(mock_db_session, payload)

        assert exc_info.value.resource == "Turtle"


class TestNestValues:

    def test_current_eggs_default_to_total(self):
        values = nest_values(nest_request(total_num_eggs=100))
        assert values["current_num_eggs"] == 100

    def test_explicit_current_eggs_kept(self):
        values = nest_values(nest_request(total_num_eggs=100, current_num_eggs=80))
        assert values["current_num_eggs"] == 80

    def test_defaults(self):
        values = nest_values(nest_request())
        assert values["status"] == "incubating"
        assert values["relocated"] is False
        assert values["is_archived"] is False

    def test_status_normalized(self):
        assert nest_values(nest_request(status=" Hatching "))["status"] == "hatching"

    def test_invalid_status(self):
        with pytest.raises(ValidationError):
            nest_values(nest_request(status="buried"))

    def test_zero_depth_is_present(self):
        assert nest_values(nest_request(depth_top_egg_h=0))["depth_top_egg_h"] == 0

    def test_missing_beach(self):
        with pytest.raises(ValidationError) as exc_info:
            nest_values(nest_request(beach=""))
        assert exc_info.value.message == "Missing required fields: beach"


class TestNestService:

    def setup_method(self):
        self.service = NestService()

    @pytest.mark.asyncio
    async def test_duplicate_code(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError(
                "INSERT", {}, FakeDriverError("23505", "uq_turtle_nests_nest_code")
            )
        )

        with pytest.raises(ConflictError) as exc_info:
            await self.service.create(mock_db_session, nest_request())

        assert exc_info.value.message == "Nest code 'N-001' already exists"

    @pytest.mark.asyncio
    async def test_update_unknown_nest(self, mock_db_session):
        lookup_returns(mock_db_session, None)

        with pytest.raises(NotFoundError):
            await self.service.update(mock_db_session, 5, nest_request())
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_unknown_code(self, mock_db_session):
        lookup_returns(mock_db_session, None)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_by_code(mock_db_session, "N-404")

        assert exc_info.value.message == "Nest 'N-404' not found"


class TestNestEventService:

    def setup_method(self):
        self.service = NestEventService()

    @pytest.mark.asyncio
    async def test_create_requires_type_and_code(self, mock_db_session):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create(mock_db_session, NestEventCreateRequest())

        assert exc_info.value.message == "Missing required fields: event_type, nest_code"
        mock_db_session.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_unknown_nest_writes_nothing(self, mock_db_session):
        lookup_returns(mock_db_session, None)
        payload = NestEventCreateRequest(event_type="inventory", nest_code="N-404")

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.create(mock_db_session, payload)

        assert exc_info.value.resource == "Nest"
        mock_db_session.add.assert_not_called()
        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_requires_nest_id(self, mock_db_session):
        payload = NestEventUpdateRequest(event_type="inventory", nest_code="N-001")

        with pytest.raises(ValidationError) as exc_info:
            await self.service.update(mock_db_session, 1, payload)

        assert exc_info.value.message == "Missing required fields: nest_id"

    @pytest.mark.asyncio
    async def test_update_unknown_event(self, mock_db_session):
        lookup_returns(mock_db_session, None)
        payload = NestEventUpdateRequest(event_type="inventory", nest_id=1, nest_code="N-001")

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.update(mock_db_session, 77, payload)

        assert exc_info.value.message == "Nest event '77' not found"

    def test_null_counts_become_zero(self):
        payload = NestEventCreateRequest(event_type="inventory", nest_code="N-1", hatched=None)
        assert payload.hatched == 0
        assert payload.tracks_lost == 0
        assert payload.original_width_w is None
