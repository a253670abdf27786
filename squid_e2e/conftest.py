import pytest

from squid_e2e.config import E2eTargetProfile, settings
from squid_e2e.mock_deployment import MockDeploymentServer, reset_mock_state
from squid_e2e.observations import ObservationLog

NO_TARGET_REASON = "No deployment configured: set E2E_BASE_URL, or E2E_TARGET=mock for the in-process mock"


def _profile_id(profile: E2eTargetProfile | None) -> str:
    return profile.name if profile else "unconfigured"


@pytest.fixture(params=settings.profiles() or [None], ids=_profile_id)
def active_profile(request):
    """Activate each configured target profile for the test run."""
    profile: E2eTargetProfile | None = request.param
    if profile is None:
        pytest.skip(NO_TARGET_REASON)
    with settings.use_profile(profile):
        yield profile


@pytest.fixture(scope='session', autouse=True)
def mock_deployment_target():
    """Serve the mock deployment on E2E_MOCK_PORT when E2E_TARGET=mock."""
    if not settings.uses_mock():
        yield None
        return

    reset_mock_state()
    server = MockDeploymentServer(port=settings.mock_port)
    server.start()
    yield server
    server.stop()
    reset_mock_state()


@pytest.fixture()
def observations(request):
    """Sink for informational checks; results land in the test report."""
    log = ObservationLog(nodeid=request.node.nodeid)
    yield log
    request.node.user_properties.extend(log.as_user_properties())


@pytest.fixture(scope='function')
def mock_deployment():
    """A private mock deployment on a free port, for harness self-checks."""
    reset_mock_state()
    server = MockDeploymentServer()
    server.start()

    yield server

    server.stop()
    reset_mock_state()
