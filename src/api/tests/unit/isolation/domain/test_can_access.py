"""Unit tests for IsolationContext.can_access().

The access decision is the sole gate before a record reaches a caller, so
each rule is covered on its own: platform override, exact match for private
data, fail-closed sharing, and tier matching for shared data.
"""

import pytest

from isolation.domain import (
    DataAccessDescriptor,
    DepartmentId,
    IsolationContext,
    IsolationLevel,
    OrganizationId,
    SharingLevel,
    TenantId,
    UserId,
)

UUID_TENANT = "550e8400-e29b-41d4-a716-446655440000"
UUID_ORG = "6ba7b810-9dad-41d1-80b4-00c04fd430c8"
UUID_DEPT = "7c9e6679-7425-40de-944b-e07fc1f90ae7"
UUID_USER = "a0eebc99-9c0b-4ef8-bb6d-6bb9bd380a11"
UUID_TENANT_2 = "123e4567-e89b-42d3-a456-426614174000"
UUID_ORG_2 = "123e4567-e89b-42d3-a456-426614174001"
UUID_DEPT_2 = "123e4567-e89b-42d3-a456-426614174002"
UUID_USER_2 = "123e4567-e89b-42d3-a456-426614174003"


@pytest.fixture
def t1() -> TenantId:
    return TenantId.from_string(UUID_TENANT)


@pytest.fixture
def t2() -> TenantId:
    return TenantId.from_string(UUID_TENANT_2)


@pytest.fixture
def o1() -> OrganizationId:
    return OrganizationId.from_string(UUID_ORG)


@pytest.fixture
def o2() -> OrganizationId:
    return OrganizationId.from_string(UUID_ORG_2)


@pytest.fixture
def d1() -> DepartmentId:
    return DepartmentId.from_string(UUID_DEPT)


@pytest.fixture
def d2() -> DepartmentId:
    return DepartmentId.from_string(UUID_DEPT_2)


@pytest.fixture
def u1() -> UserId:
    return UserId.from_string(UUID_USER)


@pytest.fixture
def u2() -> UserId:
    return UserId.from_string(UUID_USER_2)


class TestPlatformOverride:
    """The platform context reads everything."""

    @pytest.mark.parametrize("is_shared", [True, False])
    @pytest.mark.parametrize("sharing_level", [None, *SharingLevel])
    def test_platform_can_access_any_data(self, t1, o1, d1, is_shared, sharing_level):
        data_context = IsolationContext.department(t1, o1, d1)

        assert IsolationContext.platform().can_access(
            data_context, is_shared, sharing_level
        )

    def test_platform_can_access_user_data(self, u1):
        assert IsolationContext.platform().can_access(IsolationContext.user(u1), False)


class TestPrivateData:
    """Non-shared data requires an exact context match."""

    def test_same_tenant_is_allowed(self, t1):
        requester = IsolationContext.tenant(t1)

        assert requester.can_access(IsolationContext.tenant(t1), False)

    def test_other_tenant_is_denied(self, t1, t2):
        requester = IsolationContext.tenant(t1)

        assert not requester.can_access(IsolationContext.tenant(t2), False)

    def test_sibling_organization_is_denied(self, t1, o1, o2):
        requester = IsolationContext.organization(t1, o1)

        assert not requester.can_access(IsolationContext.organization(t1, o2), False)

    def test_sibling_department_is_denied(self, t1, o1, d1, d2):
        requester = IsolationContext.department(t1, o1, d1)

        assert not requester.can_access(IsolationContext.department(t1, o1, d2), False)

    def test_no_hierarchical_match_for_private_data(self, t1, o1, d1):
        """A department requester cannot read its tenant's private data."""
        requester = IsolationContext.department(t1, o1, d1)

        assert not requester.can_access(IsolationContext.tenant(t1), False)

    def test_broader_requester_cannot_read_deeper_private_data(self, t1, o1):
        requester = IsolationContext.tenant(t1)

        assert not requester.can_access(IsolationContext.organization(t1, o1), False)

    def test_user_with_and_without_tenant_differ(self, t1, u1):
        requester = IsolationContext.user(u1, t1)

        assert not requester.can_access(IsolationContext.user(u1), False)
        assert requester.can_access(IsolationContext.user(u1, t1), False)

    def test_sharing_level_is_ignored_for_private_data(self, t1, t2):
        requester = IsolationContext.tenant(t1)

        assert not requester.can_access(
            IsolationContext.tenant(t2), False, SharingLevel.PLATFORM
        )


class TestSharedDataWithoutLevel:
    """Shared data without a sharing level fails closed."""

    def test_missing_sharing_level_is_denied(self, t1):
        requester = IsolationContext.tenant(t1)

        assert not requester.can_access(IsolationContext.tenant(t1), True, None)

    def test_isolation_level_is_not_a_sharing_level(self, t1):
        """Passing the wrong enum type should fail closed, not match."""
        requester = IsolationContext.tenant(t1)

        assert not requester.can_access(
            IsolationContext.tenant(t1),
            True,
            IsolationLevel.TENANT,  # type: ignore[arg-type]
        )

    def test_raw_string_is_not_a_sharing_level(self, t1):
        requester = IsolationContext.tenant(t1)

        assert not requester.can_access(
            IsolationContext.tenant(t1), True, "tenant"  # type: ignore[arg-type]
        )


class TestPlatformSharing:
    def test_everyone_can_read_platform_shared_data(self, t1, u1):
        data_context = IsolationContext.platform()

        assert IsolationContext.tenant(t1).can_access(
            data_context, True, SharingLevel.PLATFORM
        )
        assert IsolationContext.user(u1).can_access(
            data_context, True, SharingLevel.PLATFORM
        )


class TestTenantSharing:
    def test_deeper_requester_in_same_tenant_is_allowed(self, t1, o1, d1):
        requester = IsolationContext.department(t1, o1, d1)

        assert requester.can_access(IsolationContext.tenant(t1), True, SharingLevel.TENANT)

    def test_requester_in_other_tenant_is_denied(self, t1, t2, o1, d1):
        requester = IsolationContext.department(t1, o1, d1)

        assert not requester.can_access(
            IsolationContext.tenant(t2), True, SharingLevel.TENANT
        )

    def test_user_with_tenant_is_allowed(self, t1, u1):
        requester = IsolationContext.user(u1, t1)

        assert requester.can_access(IsolationContext.tenant(t1), True, SharingLevel.TENANT)

    def test_user_without_tenant_is_denied(self, t1, u1):
        requester = IsolationContext.user(u1)

        assert not requester.can_access(
            IsolationContext.tenant(t1), True, SharingLevel.TENANT
        )


class TestOrganizationSharing:
    def test_department_in_same_organization_is_allowed(self, t1, o1, d1):
        requester = IsolationContext.department(t1, o1, d1)

        assert requester.can_access(
            IsolationContext.organization(t1, o1), True, SharingLevel.ORGANIZATION
        )

    def test_other_organization_is_denied(self, t1, o1, o2):
        requester = IsolationContext.organization(t1, o2)

        assert not requester.can_access(
            IsolationContext.organization(t1, o1), True, SharingLevel.ORGANIZATION
        )

    def test_tenant_requester_lacks_organization(self, t1, o1):
        """A missing identifier on the requester side is no match."""
        requester = IsolationContext.tenant(t1)

        assert not requester.can_access(
            IsolationContext.organization(t1, o1), True, SharingLevel.ORGANIZATION
        )

    def test_data_without_organization_is_denied(self, t1, o1):
        """A missing identifier on the data side is no match."""
        requester = IsolationContext.organization(t1, o1)

        assert not requester.can_access(
            IsolationContext.tenant(t1), True, SharingLevel.ORGANIZATION
        )


class TestDepartmentSharing:
    def test_same_department_is_allowed(self, t1, o1, d1):
        requester = IsolationContext.department(t1, o1, d1)

        assert requester.can_access(
            IsolationContext.department(t1, o1, d1), True, SharingLevel.DEPARTMENT
        )

    def test_sibling_department_is_denied(self, t1, o1, d1, d2):
        requester = IsolationContext.department(t1, o1, d2)

        assert not requester.can_access(
            IsolationContext.department(t1, o1, d1), True, SharingLevel.DEPARTMENT
        )


class TestUserSharing:
    def test_same_user_is_allowed(self, u1):
        assert IsolationContext.user(u1).can_access(
            IsolationContext.user(u1), True, SharingLevel.USER
        )

    def test_same_user_across_tenant_scopes_is_allowed(self, t1, u1):
        """Only the user tier is compared for user-shared data."""
        assert IsolationContext.user(u1, t1).can_access(
            IsolationContext.user(u1), True, SharingLevel.USER
        )

    def test_other_user_is_denied(self, u1, u2):
        assert not IsolationContext.user(u2).can_access(
            IsolationContext.user(u1), True, SharingLevel.USER
        )

    def test_non_user_requester_is_denied(self, t1, u1):
        assert not IsolationContext.tenant(t1).can_access(
            IsolationContext.user(u1, t1), True, SharingLevel.USER
        )


class TestCanAccessDescriptor:
    """can_access_descriptor() delegates to can_access()."""

    def test_shared_descriptor(self, t1, o1, d1):
        requester = IsolationContext.department(t1, o1, d1)
        descriptor = DataAccessDescriptor(
            isolation_context=IsolationContext.tenant(t1),
            is_shared=True,
            sharing_level=SharingLevel.TENANT,
        )

        assert requester.can_access_descriptor(descriptor)

    def test_private_descriptor(self, t1, t2):
        requester = IsolationContext.tenant(t1)
        descriptor = DataAccessDescriptor(isolation_context=IsolationContext.tenant(t2))

        assert not requester.can_access_descriptor(descriptor)
