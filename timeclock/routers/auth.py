import bcrypt
from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import User
from ..schemas.auth import LoginForm, SignupForm, UserRead

router = APIRouter(prefix="/api/auth", tags=["auth"])


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def require_user(request: Request) -> int:
    user = request.session.get("user")
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return user["id"]


def _start_session(request: Request, user: User) -> None:
    request.session.clear()
    request.session["user"] = {
        "id": user.id,
        "username": user.username,
        "is_admin": bool(user.is_admin),
        "timezone": user.timezone,
    }


@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(request: Request, payload: SignupForm, db: Session = Depends(get_db)):
    email = payload.email.lower()
    existing = (
        db.query(User)
        .filter((User.email == email) | (User.username == payload.username))
        .first()
    )
    if existing:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email or username already registered")

    # The first account becomes the administrator.
    is_first = db.query(User.id).first() is None
    user = User(
        username=payload.username,
        email=email,
        password_hash=get_password_hash(payload.password),
        is_admin=is_first,
        timezone=payload.timezone,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    _start_session(request, user)
    return {"user": UserRead.model_validate(user).model_dump(mode="json")}


@router.post("/login")
async def login(request: Request, payload: LoginForm, db: Session = Depends(get_db)):
    user = db.query(User).filter(User.email == payload.email.lower()).one_or_none()
    if not user or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    _start_session(request, user)
    return {"user": UserRead.model_validate(user).model_dump(mode="json")}


@router.post("/logout")
async def logout(request: Request):
    request.session.clear()
    return {"message": "Logged out"}


@router.get("/me")
async def me(user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.id == user_id).one_or_none()
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return {"user": UserRead.model_validate(user).model_dump(mode="json")}
