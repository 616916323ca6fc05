import logging
import uuid

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from jose import ExpiredSignatureError, JWTError, jwt

from core.mapper import ORMMapper
from core.settings import settings
from core.validators import get_request_token
from models.enums import TokenType
from models.models import User
from repos.auth_repo import AuthRepo
from schemas.schema import UserPublicSchema
from security.security_generate import token_generate

logger = logging.getLogger(__name__)

ACCESS_EXPIRE_MINUTES = settings.ACCESS_EXPIRE_MINUTES
REFRESH_EXPIRE_DAYS = settings.REFRESH_EXPIRE_DAYS
SECURE_COOKIES = settings.SECURE_COOKIES


class AuthService:
    def __init__(self, db):
        self.repo: AuthRepo = AuthRepo(db)
        self.mapper: ORMMapper = ORMMapper()

    def _public(self, user: User) -> dict:
        return self.mapper.dump(self.mapper.one(user, UserPublicSchema))

    def _set_access_cookie(self, response: JSONResponse, token: str):
        response.set_cookie(
            key="access_token",
            value=token,
            httponly=True,
            secure=SECURE_COOKIES,
            samesite="lax",
            max_age=ACCESS_EXPIRE_MINUTES * 60,
        )

    async def register(self, data):
        if await self.repo.get_by_email(email=data.email):
            raise HTTPException(status_code=400, detail="Email already registered")

        user = User(
            email=data.email,
            name=data.name,
            role=data.role,
            phone=data.phone,
        )
        user.normalize()
        user.set_password(raw_password=data.password)
        await self.repo.create(user)
        logger.info(f"Registered {user.role.value} account {user.id}")

        return JSONResponse(
            {"message": "Registration successful", "user": self._public(user)},
            status_code=201,
        )

    async def login(self, data):
        user = await self.repo.get_by_email(data.email)
        if not user or not user.check_password(raw_password=data.password):
            raise HTTPException(status_code=401, detail="Invalid credentials")

        access_token = token_generate.access_token(user.id)
        refresh_token = token_generate.refresh_token(user.id)
        response = JSONResponse(
            {
                "message": "Login successful",
                "accessToken": access_token,
                "refreshToken": refresh_token,
                "user": self._public(user),
            },
            status_code=200,
        )

        self._set_access_cookie(response, access_token)
        response.set_cookie(
            key="refresh_token",
            value=refresh_token,
            httponly=True,
            secure=SECURE_COOKIES,
            samesite="lax",
            max_age=REFRESH_EXPIRE_DAYS * 86400,
        )
        return response

    async def refresh(self, request: Request, data=None):
        refresh_token = (data.refresh_token if data else None) or request.cookies.get(
            "refresh_token"
        )
        if not refresh_token:
            raise HTTPException(status_code=401, detail="No refresh token")
        if await self.repo.is_token_blacklisted(refresh_token):
            raise HTTPException(status_code=401, detail="Refresh token revoked")

        try:
            payload = jwt.decode(
                refresh_token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
            )
        except ExpiredSignatureError:
            raise HTTPException(status_code=401, detail="Refresh token expired")
        except JWTError:
            raise HTTPException(status_code=401, detail="Invalid refresh token")

        if payload.get("type") != TokenType.REFRESH.value:
            raise HTTPException(status_code=401, detail="Invalid token type")

        user = await self.repo.by_id(self._subject(payload))
        if not user:
            raise HTTPException(status_code=401, detail="Not authenticated")

        new_access_token = token_generate.access_token(user.id)
        response = JSONResponse({"accessToken": new_access_token})
        self._set_access_cookie(response, new_access_token)
        return response

    def _subject(self, payload: dict) -> uuid.UUID:
        try:
            return uuid.UUID(str(payload.get("sub")))
        except ValueError:
            raise HTTPException(status_code=401, detail="Invalid refresh token")

    async def logout(self, request: Request):
        for token in {get_request_token(request), request.cookies.get("refresh_token")}:
            if token:
                await self.repo.blacklist_token(token)

        response = JSONResponse({"message": "Logged out successfully"})
        for cookie in ("access_token", "refresh_token"):
            response.delete_cookie(
                key=cookie,
                path="/",
                secure=SECURE_COOKIES,
                httponly=True,
                samesite="lax",
            )
        return response
