"""User profile, friendship and notification endpoints."""

import logging

from fastapi import APIRouter, status

from handbook.auth import CurrentUserId, ensure_same_user
from handbook.core.response import ApiResponse, success_response
from handbook.database.session import DbSession

from .schemas import FriendResponse, NotificationResponse, UserProfile, UserProfileUpdate, UserRegister
from .service import UserService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["users"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register_user(data: UserRegister, db: DbSession) -> ApiResponse[UserProfile]:
    user = await UserService(db).register(data)
    return success_response(user, "User registered")


@router.get("/{uid}")
async def get_user_profile(uid: str, db: DbSession) -> ApiResponse[UserProfile]:
    return success_response(await UserService(db).get_profile(uid), "Profile fetched successfully")


@router.post("/{uid}")
async def update_user_profile(
    uid: str,
    update: UserProfileUpdate,
    db: DbSession,
    current_user_id: CurrentUserId,
) -> ApiResponse[UserProfile]:
    ensure_same_user(current_user_id, uid)
    return success_response(await UserService(db).update_profile(uid, update), "Profile updated successfully")


@router.get("/{uid}/friends")
async def list_friends(uid: str, db: DbSession) -> ApiResponse[list[FriendResponse]]:
    return success_response(await UserService(db).list_friends(uid), "Friends fetched successfully")


@router.post("/{uid}/friends/{friend_id}", status_code=status.HTTP_201_CREATED)
async def add_friend(
    uid: str,
    friend_id: str,
    db: DbSession,
    current_user_id: CurrentUserId,
) -> ApiResponse[FriendResponse]:
    ensure_same_user(current_user_id, uid)
    return success_response(await UserService(db).add_friend(uid, friend_id), "Friend added")


@router.delete("/{uid}/friends/{friend_id}")
async def remove_friend(
    uid: str,
    friend_id: str,
    db: DbSession,
    current_user_id: CurrentUserId,
) -> ApiResponse[None]:
    ensure_same_user(current_user_id, uid)
    await UserService(db).remove_friend(uid, friend_id)
    return success_response(message="Friend removed")


@router.get("/{uid}/notifications")
async def list_notifications(
    uid: str,
    db: DbSession,
    current_user_id: CurrentUserId,
    unread_only: bool = False,
) -> ApiResponse[list[NotificationResponse]]:
    ensure_same_user(current_user_id, uid)
    notifications = await UserService(db).list_notifications(uid, unread_only)
    return success_response(notifications, "Notifications fetched successfully")


@router.post("/{uid}/notifications/{notification_id}/read")
async def mark_notification_read(
    uid: str,
    notification_id: int,
    db: DbSession,
    current_user_id: CurrentUserId,
) -> ApiResponse[NotificationResponse]:
    ensure_same_user(current_user_id, uid)
    notification = await UserService(db).mark_notification_read(uid, notification_id)
    return success_response(notification, "Notification marked as read")
