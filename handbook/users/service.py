"""User profiles, friendships and notifications."""

import logging

from sqlalchemy import and_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from handbook.exceptions import AlreadyExistsError, InvalidParameterError, NotFoundError

from .models import Friendship, Notification, User
from .schemas import FriendResponse, NotificationResponse, UserProfile, UserProfileUpdate, UserRegister


logger = logging.getLogger(__name__)

FRIEND_ADDED = "FRIEND_ADDED"


class UserService:
    """Service for user-facing social features."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _get_user(self, user_id: str) -> User:
        user = await self.session.get(User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    async def register(self, data: UserRegister) -> UserProfile:
        """Create a profile for a user already known to the identity provider."""
        if await self.session.get(User, data.user_id) is not None:
            raise AlreadyExistsError("User", data.user_id)

        existing_email = await self.session.scalar(select(User.user_id).where(User.email == data.email))
        if existing_email is not None:
            raise AlreadyExistsError("User with email", data.email)

        user = User(
            user_id=data.user_id,
            email=data.email,
            username=data.email.split("@")[0],
            display_name=data.display_name,
        )
        self.session.add(user)
        try:
            await self.session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration of the same id or email
            await self.session.rollback()
            raise AlreadyExistsError("User", data.user_id) from e
        await self.session.refresh(user)

        logger.info(f"Registered user {user.user_id}")
        return UserProfile.model_validate(user)

    async def get_profile(self, user_id: str) -> UserProfile:
        return UserProfile.model_validate(await self._get_user(user_id))

    async def update_profile(self, user_id: str, update: UserProfileUpdate) -> UserProfile:
        user = await self._get_user(user_id)
        for field, value in update.model_dump(exclude_unset=True).items():
            setattr(user, field, value)

        await self.session.commit()
        await self.session.refresh(user)
        return UserProfile.model_validate(user)

    async def add_friend(self, user_id: str, friend_id: str) -> FriendResponse:
        """Add ``friend_id`` to the user's friends and notify them."""
        if user_id == friend_id:
            msg = "Users cannot befriend themselves"
            raise InvalidParameterError(msg)

        user = await self._get_user(user_id)
        friend = await self._get_user(friend_id)

        existing = await self.session.scalar(
            select(Friendship).where(and_(Friendship.user_id == user_id, Friendship.friend_id == friend_id))
        )
        if existing is not None:
            raise AlreadyExistsError("Friendship", f"{user_id}->{friend_id}")

        friendship = Friendship(user_id=user_id, friend_id=friend_id)
        self.session.add(friendship)
        self.session.add(
            Notification(
                user_id=friend_id,
                type=FRIEND_ADDED,
                message=f"{user.display_name or user.username or user_id} added you as a friend",
            )
        )
        await self.session.commit()
        await self.session.refresh(friendship)

        logger.info(f"User {user_id} added friend {friend_id}")
        return FriendResponse(
            user_id=friend.user_id,
            username=friend.username,
            display_name=friend.display_name,
            photo_url=friend.photo_url,
            since=friendship.created_at,
        )

    async def list_friends(self, user_id: str) -> list[FriendResponse]:
        await self._get_user(user_id)

        result = await self.session.execute(
            select(User, Friendship.created_at)
            .join(Friendship, Friendship.friend_id == User.user_id)
            .where(Friendship.user_id == user_id)
            .order_by(Friendship.friendship_id)
        )
        return [
            FriendResponse(
                user_id=friend.user_id,
                username=friend.username,
                display_name=friend.display_name,
                photo_url=friend.photo_url,
                since=since,
            )
            for friend, since in result.all()
        ]

    async def remove_friend(self, user_id: str, friend_id: str) -> None:
        friendship = await self.session.scalar(
            select(Friendship).where(and_(Friendship.user_id == user_id, Friendship.friend_id == friend_id))
        )
        if friendship is None:
            raise NotFoundError("Friendship", f"{user_id}->{friend_id}")

        await self.session.delete(friendship)
        await self.session.commit()
        logger.info(f"User {user_id} removed friend {friend_id}")

    async def list_notifications(self, user_id: str, unread_only: bool = False) -> list[NotificationResponse]:
        """Newest first."""
        await self._get_user(user_id)

        query = select(Notification).where(Notification.user_id == user_id)
        if unread_only:
            query = query.where(Notification.is_read.is_(False))
        query = query.order_by(Notification.notification_id.desc())

        result = await self.session.execute(query)
        return [NotificationResponse.model_validate(n) for n in result.scalars().all()]

    async def mark_notification_read(self, user_id: str, notification_id: int) -> NotificationResponse:
        notification = await self.session.scalar(
            select(Notification).where(
                and_(Notification.notification_id == notification_id, Notification.user_id == user_id)
            )
        )
        if notification is None:
            raise NotFoundError("Notification", notification_id)

        notification.is_read = True
        await self.session.commit()
        await self.session.refresh(notification)
        return NotificationResponse.model_validate(notification)
