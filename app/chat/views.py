"""
ViewSets for chat API.

This module provides REST API endpoints for the chat system:
- ChatViewSet: Chat list, creation and detail
- MessageViewSet: Message list and send (nested under chat)

URL Structure:
    /api/v1/chats/                  GET, POST
    /api/v1/chats/{id}/             GET
    /api/v1/chats/{id}/messages/    GET, POST

Design Decisions:
    - Views only parse input and render output; ChatService and
      MessageService decide membership, validation and storage
    - Failures use the ServiceResult envelope and status mapping
    - The caller is passed to serializers as ``context["caller"]``
"""

from __future__ import annotations

from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from chat.serializers import (
    ChatCreateSerializer,
    ChatSerializer,
    ChatWithMembersSerializer,
    MessageCreateSerializer,
    MessageSerializer,
)
from chat.services import ChatService, MessageService
from core.views import invalid_data_response, service_failure_response


@extend_schema_view(
    list=extend_schema(
        operation_id="list_chats",
        summary="List chats",
        tags=["Chat - Chats"],
        responses=ChatSerializer(many=True),
    ),
    create=extend_schema(
        operation_id="create_chat",
        summary="Create chat",
        tags=["Chat - Chats"],
        request=ChatCreateSerializer,
        responses={
            201: OpenApiResponse(ChatSerializer, description="Chat created"),
            200: OpenApiResponse(
                ChatSerializer, description="Private chat already exists"
            ),
        },
    ),
    retrieve=extend_schema(
        operation_id="get_chat",
        summary="Get chat",
        tags=["Chat - Chats"],
        responses=ChatSerializer,
    ),
)
class ChatViewSet(viewsets.ViewSet):
    """
    ViewSet for chat operations.

    list:
        Get all chats the current user is a member of, most recently
        active first, with message count and last message preview.

    create:
        Create a chat (private or group).
        For private: returns the existing chat if one exists (200),
        creates one if not (201).
        For group: always creates a new chat with the caller included.

    retrieve:
        Get a single chat the current user is a member of.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = ChatSerializer
    lookup_value_regex = r"\d+"

    def get_serializer_context(self):
        return {"request": self.request, "caller": self.request.user}

    def list(self, request):
        chats = ChatService.list_chats(caller=request.user)
        data = ChatSerializer(
            chats, many=True, context=self.get_serializer_context()
        ).data

        return Response(
            {
                "success": True,
                "message": "Chats retrieved successfully",
                "data": data,
                "count": len(data),
            }
        )

    def create(self, request):
        serializer = ChatCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_data_response(serializer)

        data = serializer.validated_data
        result = ChatService.create_chat(
            caller=request.user,
            chat_type=data["type"],
            member_ids=data["users"],
            name=data.get("name"),
        )
        if not result:
            return service_failure_response(result)

        creation = result.data
        output = ChatSerializer(
            creation.chat, context=self.get_serializer_context()
        ).data

        if creation.created:
            return Response(
                {
                    "success": True,
                    "message": "Chat created successfully",
                    "data": output,
                },
                status=status.HTTP_201_CREATED,
            )

        return Response(
            {
                "success": True,
                "message": "Chat already exists",
                "data": output,
            }
        )

    def retrieve(self, request, pk=None):
        result = ChatService.get_chat(caller=request.user, chat_id=pk)
        if not result:
            return service_failure_response(result)

        return Response(
            {
                "success": True,
                "message": "Chat retrieved successfully",
                "data": ChatSerializer(
                    result.data, context=self.get_serializer_context()
                ).data,
            }
        )


@extend_schema_view(
    list=extend_schema(
        operation_id="list_messages",
        summary="List messages",
        tags=["Chat - Messages"],
    ),
    create=extend_schema(
        operation_id="send_message",
        summary="Send message",
        tags=["Chat - Messages"],
        request=MessageCreateSerializer,
        responses={201: MessageSerializer},
    ),
)
class MessageViewSet(viewsets.ViewSet):
    """
    ViewSet for message operations within a chat.

    list:
        Get the chat (with all members) and its messages, oldest first.

    create:
        Send a message to the chat. The text may be sent as ``body``,
        ``content`` or ``message``.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = MessageSerializer

    def list(self, request, chat_pk=None):
        result = MessageService.list_messages(caller=request.user, chat_id=chat_pk)
        if not result:
            return service_failure_response(result)

        chat_messages = result.data
        return Response(
            {
                "chat": ChatWithMembersSerializer(
                    chat_messages.chat,
                    context={"request": request, "caller": request.user},
                ).data,
                "messages": MessageSerializer(chat_messages.messages, many=True).data,
            }
        )

    def create(self, request, chat_pk=None):
        serializer = MessageCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_data_response(serializer)

        result = MessageService.send_message(
            caller=request.user,
            chat_id=chat_pk,
            body=serializer.validated_data["body"],
        )
        if not result:
            return service_failure_response(result)

        return Response(
            {
                "success": True,
                "message": "Message sent successfully",
                "data": MessageSerializer(result.data).data,
            },
            status=status.HTTP_201_CREATED,
        )
