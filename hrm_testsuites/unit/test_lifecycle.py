import pytest
from playwright.async_api import Error as PlaywrightError

from hrm_testsuites.ui_testing.framework.errors import (
    AssertionFailure,
    LifecycleError,
    NavigationError,
)
from hrm_testsuites.ui_testing.lifecycle import LifecycleState, LoginTestContext, login_lifecycle


FULL_RUN = [
    LifecycleState.INIT,
    LifecycleState.SESSION_READY,
    LifecycleState.PAGE_READY,
    LifecycleState.ACTION_PERFORMED,
    LifecycleState.ASSERTED,
    LifecycleState.TORN_DOWN,
]


@pytest.mark.asyncio
async def test_valid_credentials_reach_dashboard(login_form, settings, registry, fake_playwright):
    async with login_lifecycle(settings, owner="valid", registry=registry) as ctx:
        assert ctx.state is LifecycleState.PAGE_READY
        assert fake_playwright.page.goto_calls == [settings.login_url]

        await ctx.login(settings.credential("valid"))
        await ctx.assert_url_contains("/dashboard")

    assert ctx.history == FULL_RUN
    assert ctx.session.close_count == 1
    registry.assert_no_leaks()


@pytest.mark.asyncio
async def test_invalid_credentials_show_message(login_form, settings, registry):
    async with login_lifecycle(settings, owner="invalid", registry=registry) as ctx:
        await ctx.login(settings.credential("invalid"))
        await ctx.assert_content_contains("Invalid credentials")

    assert ctx.state is LifecycleState.TORN_DOWN
    assert "/dashboard" not in login_form.url


@pytest.mark.asyncio
async def test_empty_credentials_are_rejected_by_fake_form(login_form, settings, registry):
    async with login_lifecycle(settings, owner="empty", registry=registry) as ctx:
        await ctx.login(settings.credential("empty"))
        await ctx.assert_content_contains(settings.required_field_message)


@pytest.mark.asyncio
async def test_failed_assertion_still_tears_down(login_form, settings, registry):
    with pytest.raises(AssertionFailure) as exc_info:
        async with login_lifecycle(settings, owner="wrong", registry=registry) as ctx:
            await ctx.login(settings.credential("invalid"))
            await ctx.assert_url_contains("/dashboard")

    error = exc_info.value
    assert isinstance(error, AssertionError)
    assert error.expected == "/dashboard"
    assert error.observed == settings.login_url

    assert ctx.state is LifecycleState.TORN_DOWN
    assert LifecycleState.ASSERTED not in ctx.history
    assert ctx.session.close_count == 1
    assert login_form.screenshots, "failure screenshot should be captured before teardown"
    registry.assert_no_leaks()


@pytest.mark.asyncio
async def test_error_in_body_still_tears_down(login_form, settings, registry):
    with pytest.raises(RuntimeError, match="boom"):
        async with login_lifecycle(settings, owner="boom", registry=registry) as ctx:
            raise RuntimeError("boom")

    assert ctx.history == [
        LifecycleState.INIT,
        LifecycleState.SESSION_READY,
        LifecycleState.PAGE_READY,
        LifecycleState.TORN_DOWN,
    ]
    assert ctx.session.close_count == 1


@pytest.mark.asyncio
async def test_unreachable_login_screen_fails_setup(fake_playwright, settings, registry):
    fake_playwright.page.goto_error = PlaywrightError("net::ERR_CONNECTION_REFUSED")

    with pytest.raises(NavigationError):
        async with login_lifecycle(settings, owner="down", registry=registry):
            pytest.fail("body must not run when setup fails")

    assert fake_playwright.stop_calls == 1
    registry.assert_no_leaks()


@pytest.mark.asyncio
async def test_session_close_is_safe_after_teardown(login_form, settings, registry):
    async with login_lifecycle(settings, registry=registry) as ctx:
        pass

    await ctx.session.close()
    assert ctx.session.close_count == 1


@pytest.mark.asyncio
async def test_assert_before_login_is_rejected(login_form, settings, registry):
    async with login_lifecycle(settings, registry=registry) as ctx:
        with pytest.raises(LifecycleError):
            await ctx.assert_url_contains("/dashboard")


@pytest.mark.asyncio
async def test_only_one_assertion_per_test(login_form, settings, registry):
    async with login_lifecycle(settings, registry=registry) as ctx:
        await ctx.login(settings.credential("valid"))
        await ctx.assert_url_contains("/dashboard")

        with pytest.raises(LifecycleError):
            await ctx.assert_content_contains("Dashboard")
        with pytest.raises(LifecycleError):
            await ctx.login(settings.credential("valid"))


def test_transition_table(settings):
    ctx = LoginTestContext(settings=settings)

    with pytest.raises(LifecycleError):
        ctx.advance(LifecycleState.PAGE_READY)

    ctx.advance(LifecycleState.SESSION_READY)
    ctx.advance(LifecycleState.TORN_DOWN)

    with pytest.raises(LifecycleError):
        ctx.advance(LifecycleState.TORN_DOWN)
    assert ctx.history == [
        LifecycleState.INIT,
        LifecycleState.SESSION_READY,
        LifecycleState.TORN_DOWN,
    ]
