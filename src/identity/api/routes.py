"""FastAPI endpoints for the Identity domain."""

from fastapi import APIRouter, Depends, Request, Response
from protean.utils.globals import current_domain

from identity.api.schemas import (
    AddressBookResponse,
    AddressRequest,
    AddressResponse,
    AdminUpdateUserRequest,
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    StatusResponse,
    UpdateAddressRequest,
    UpdateProfileRequest,
    UserEnvelope,
    UserListResponse,
    UserResponse,
)
from identity.user.addresses import AddAddress, RemoveAddress, UpdateAddress
from identity.user.administration import DeleteUserAccount, UpdateUserAccount
from identity.user.authentication import authenticate
from identity.user.profile import ChangePassword, UpdateProfile
from identity.user.registration import RegisterUser
from identity.user.user import User
from shared.access import (
    Permission,
    Principal,
    clear_token_cookie,
    current_principal,
    issue_token,
    requires,
    set_token_cookie,
)
from shared.validation import read_payload, require_valid

auth_router = APIRouter(prefix="/auth", tags=["auth"])
user_router = APIRouter(prefix="/users", tags=["users"])


def _signed_in(response: Response, user) -> AuthResponse:
    token = issue_token(user.id, user.name, user.role)
    set_token_cookie(response, token)
    return AuthResponse(token=token, user=UserResponse.from_user(user))


# --- Authentication endpoints ---


@auth_router.post("/register", status_code=201, response_model=AuthResponse)
async def register(request: Request, response: Response) -> AuthResponse:
    body = require_valid(RegisterRequest, await read_payload(request))
    command = RegisterUser(
        name=body.name,
        email=body.email,
        password=body.password,
        role=body.role,
        phone_number=body.phone_number,
    )
    user_id = current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(user_id)
    return _signed_in(response, user)


@auth_router.post("/login", response_model=AuthResponse)
async def login(request: Request, response: Response) -> AuthResponse:
    body = require_valid(LoginRequest, await read_payload(request))
    user = authenticate(body.email, body.password)
    return _signed_in(response, user)


@auth_router.get("/logout", response_model=StatusResponse)
async def logout(response: Response) -> StatusResponse:
    clear_token_cookie(response)
    return StatusResponse(message="Logged out")


@auth_router.get("/me", response_model=UserEnvelope)
async def me(principal: Principal = Depends(current_principal)) -> UserEnvelope:
    user = current_domain.repository_for(User).get(principal.user_id)
    return UserEnvelope(user=UserResponse.from_user(user))


# --- Account endpoints ---


@user_router.put("/me/update", response_model=UserEnvelope)
async def update_profile(request: Request, principal: Principal = Depends(current_principal)) -> UserEnvelope:
    body = require_valid(UpdateProfileRequest, await read_payload(request))
    command = UpdateProfile(
        user_id=principal.user_id,
        name=body.name,
        email=body.email,
        phone_number=body.phone_number,
    )
    current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(principal.user_id)
    return UserEnvelope(user=UserResponse.from_user(user))


@user_router.put("/password/update", response_model=AuthResponse)
async def update_password(
    request: Request, response: Response, principal: Principal = Depends(current_principal)
) -> AuthResponse:
    body = require_valid(ChangePasswordRequest, await read_payload(request))
    command = ChangePassword(
        user_id=principal.user_id,
        old_password=body.old_password,
        new_password=body.new_password,
    )
    current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(principal.user_id)
    return _signed_in(response, user)


# --- Address book endpoints ---


def _address_book(user_id) -> AddressBookResponse:
    user = current_domain.repository_for(User).get(user_id)
    return AddressBookResponse(addresses=[AddressResponse.from_address(address) for address in user.addresses])


@user_router.post("/address", response_model=AddressBookResponse)
async def add_address(request: Request, principal: Principal = Depends(current_principal)) -> AddressBookResponse:
    body = require_valid(AddressRequest, await read_payload(request))
    command = AddAddress(
        user_id=principal.user_id,
        street=body.street,
        city=body.city,
        state=body.state,
        zip_code=body.zip_code,
        country=body.country,
        is_default=body.is_default,
    )
    current_domain.process(command, asynchronous=False)
    return _address_book(principal.user_id)


@user_router.put("/address/{address_id}", response_model=AddressBookResponse)
async def update_address(
    address_id: str, request: Request, principal: Principal = Depends(current_principal)
) -> AddressBookResponse:
    body = require_valid(UpdateAddressRequest, await read_payload(request))
    command = UpdateAddress(
        user_id=principal.user_id,
        address_id=address_id,
        street=body.street,
        city=body.city,
        state=body.state,
        zip_code=body.zip_code,
        country=body.country,
        is_default=body.is_default,
    )
    current_domain.process(command, asynchronous=False)
    return _address_book(principal.user_id)


@user_router.delete("/address/{address_id}", response_model=AddressBookResponse)
async def remove_address(address_id: str, principal: Principal = Depends(current_principal)) -> AddressBookResponse:
    current_domain.process(RemoveAddress(user_id=principal.user_id, address_id=address_id), asynchronous=False)
    return _address_book(principal.user_id)


# --- Administration endpoints ---


@user_router.get("/admin/all", response_model=UserListResponse)
async def list_users(principal: Principal = Depends(requires(Permission.MANAGE_USERS))) -> UserListResponse:
    users = [UserResponse.from_user(user) for user in current_domain.repository_for(User).newest_first()]
    return UserListResponse(count=len(users), users=users)


@user_router.put("/admin/{user_id}", response_model=UserEnvelope)
async def update_user(
    user_id: str, request: Request, principal: Principal = Depends(requires(Permission.MANAGE_USERS))
) -> UserEnvelope:
    body = require_valid(AdminUpdateUserRequest, await read_payload(request))
    command = UpdateUserAccount(
        user_id=user_id,
        name=body.name,
        email=body.email,
        role=body.role,
    )
    current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(user_id)
    return UserEnvelope(user=UserResponse.from_user(user))


@user_router.delete("/admin/{user_id}", response_model=StatusResponse)
async def delete_user(
    user_id: str, principal: Principal = Depends(requires(Permission.MANAGE_USERS))
) -> StatusResponse:
    current_domain.process(DeleteUserAccount(user_id=user_id, requested_by=principal.user_id), asynchronous=False)
    return StatusResponse(message="User deleted")
