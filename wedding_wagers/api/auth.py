"""
Authentication endpoints
"""
from fastapi import APIRouter, Depends

from wedding_wagers import state
from wedding_wagers.api.deps import current_session
from wedding_wagers.errors import InvalidArgument
from wedding_wagers.models import SessionContext, SignInRequest, SignUpRequest, VerifyEmailRequest


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/sign-up")
def sign_up(request: SignUpRequest):
    """
    Create an account

    Request:
        {
            "email": "guest@example.com",
            "password": "Secret#123",
            "confirmPassword": "Secret#123",
            "name": "Alice"
        }

    The verification token is returned directly since no mail is sent.
    Plain def: Argon2 hashing runs in the threadpool, off the event loop.
    """
    if request.password != request.confirm_password:
        raise InvalidArgument("Passwords do not match.")

    user, token = state.IDENTITY.sign_up(request.email, request.password, request.name)

    return {
        "userId": user.uid,
        "email": user.email,
        "verificationToken": token,
        "message": "Account created. Please verify your email before logging in."
    }


@router.post("/verify-email")
async def verify_email(request: VerifyEmailRequest):
    user = state.IDENTITY.verify_email(request.token)
    return {"email": user.email, "emailVerified": True}


@router.post("/sign-in")
def sign_in(request: SignInRequest):
    """Check the password (Argon2, in the threadpool) and start a session"""
    context = state.IDENTITY.sign_in(request.email, request.password)
    return context.model_dump(by_alias=True)


@router.post("/sign-out")
async def sign_out(context: SessionContext = Depends(current_session)):
    state.IDENTITY.sign_out(context.token)
    return {"success": True}


@router.get("/me")
async def me(context: SessionContext = Depends(current_session)):
    """Current session, without the token"""
    return context.model_dump(by_alias=True, exclude={"token"})
