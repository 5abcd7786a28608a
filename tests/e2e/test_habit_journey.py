"""End-to-end scenarios: each user action runs in its own request scope."""

import pytest

from fitjourney.adapter.supabase.auth import SupabaseAuthClient
from fitjourney.adapter.supabase.storage import SupabaseStorageGateway
from fitjourney.application.usecase.activity import (
    ListActivityLogsRequest,
    ListActivityLogsUseCase,
    LogActivityRequest,
    LogActivityUseCase,
    VerifyActivityLogRequest,
    VerifyActivityLogUseCase,
)
from fitjourney.application.usecase.dashboard import (
    GetDashboardRequest,
    GetDashboardUseCase,
)
from fitjourney.application.usecase.water import (
    LogWaterIntakeRequest,
    LogWaterIntakeUseCase,
)
from fitjourney.domain.error import (
    ActivityLoggingError,
    LoggingStage,
    ValidationError,
)
from fitjourney.domain.service import SessionStore
from fitjourney.domain.value import AuthState, HabitType
from fitjourney.interface.client import perform
from fitjourney.interface.messages import user_message
from tests.harness import create_container_fixture

app = create_container_fixture()


async def sign_in(app, email: str = "a@x.com", password: str = "secret1"):
    auth_client = await app.get(SupabaseAuthClient)
    auth_client.add_account(email, password, full_name="Ada")
    store = await app.get(SessionStore)
    return await store.sign_in(email, password)


@pytest.mark.asyncio
async def test_log_verify_and_see_on_dashboard(app, photo):
    """Sign in, log exercise, have a friend verify it, then refresh."""
    session = await sign_in(app)
    identity = session.identity
    store = await app.get(SessionStore)
    assert store.state == AuthState.AUTHENTICATED

    logged = await perform(
        app,
        LogActivityUseCase,
        LogActivityRequest(
            user_id=str(identity.user_id),
            user_email=str(identity.email),
            habit_type="exercise",
            note="5k run",
            photo_local_ref=photo.as_uri(),
        ),
    )
    assert logged.verified is False
    assert "/habit_photos/a_exercise_" in logged.photo_url

    await perform(
        app,
        LogWaterIntakeUseCase,
        LogWaterIntakeRequest(
            user_id=str(identity.user_id), user_email=str(identity.email), cups=3
        ),
    )

    auth_client = await app.get(SupabaseAuthClient)
    friend = auth_client.add_account("friend@x.com", "secret2")
    verified = await perform(
        app,
        VerifyActivityLogUseCase,
        VerifyActivityLogRequest(
            log_id=logged.log_id, verifier_id=str(friend.user_id)
        ),
    )
    assert verified.verified is True
    assert verified.verified_by == str(friend.user_id)

    listed = await perform(
        app,
        ListActivityLogsUseCase,
        ListActivityLogsRequest(user_id=str(identity.user_id)),
    )
    assert [item.log_id for item in listed.items] == [logged.log_id]
    assert listed.items[0].habit_type == HabitType.EXERCISE
    assert listed.items[0].note == "5k run"

    dashboard = await perform(
        app,
        GetDashboardUseCase,
        GetDashboardRequest(user_id=str(identity.user_id)),
    )
    assert dashboard.water_cups.value == 3
    assert [log.log_id for log in dashboard.recent_logs] == [logged.log_id]
    assert dashboard.recent_logs[0].verified is True


@pytest.mark.asyncio
async def test_upload_outage_shows_upload_message(app, photo):
    """An upload outage leaves no log and shows the upload message."""
    session = await sign_in(app)
    gateway = await app.get(SupabaseStorageGateway)
    gateway.fail_uploads = True

    with pytest.raises(ActivityLoggingError) as exc_info:
        await perform(
            app,
            LogActivityUseCase,
            LogActivityRequest(
                user_id=str(session.identity.user_id),
                user_email=str(session.identity.email),
                habit_type="sleep",
                photo_local_ref=str(photo),
            ),
        )

    assert exc_info.value.stage == LoggingStage.UPLOAD_PHOTO
    assert "upload your photo" in user_message(exc_info.value)

    listed = await perform(
        app,
        ListActivityLogsUseCase,
        ListActivityLogsRequest(user_id=str(session.identity.user_id)),
    )
    assert listed.items == []


@pytest.mark.asyncio
async def test_missing_photo_message(app):
    """Submitting without a photo shows the validation message."""
    session = await sign_in(app)

    with pytest.raises(ValidationError) as exc_info:
        await perform(
            app,
            LogActivityUseCase,
            LogActivityRequest(
                user_id=str(session.identity.user_id),
                user_email=str(session.identity.email),
                habit_type="breakfast",
            ),
        )

    assert (
        user_message(exc_info.value) == "Please upload a photo to verify your habit."
    )


@pytest.mark.asyncio
async def test_sign_out_ends_session(app):
    await sign_in(app)
    store = await app.get(SessionStore)

    await store.sign_out()

    assert store.state == AuthState.ANONYMOUS
    assert await store.get_current_session() is None
