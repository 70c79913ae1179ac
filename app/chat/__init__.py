"""
Chat app for conversations between registered users.

This app handles:
- Private and group chat creation (private chats de-duplicated per pair)
- Chat listing ordered by recent activity
- Message sending and history

Related apps:
    - authentication: User model for members and message authors
    - core: BaseModel, ServiceResult and BaseService

Usage:
    from chat.services import ChatService, MessageService

    # Create or find a private chat
    result = ChatService.create_chat(caller=user, chat_type="private", member_ids=[other.id])

    # Send message
    result = MessageService.send_message(caller=user, chat_id=result.data.chat.id, body="Hello!")
"""
