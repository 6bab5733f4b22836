"""
Contact Us Routes

POST /contactus - Send a message (public)
GET /contactus - List messages (admin only)
DELETE /contactus/{message_id} - Delete a message (admin only)
PATCH /contactus/{message_id}/status - Set New / Contacted / Resolved (admin only)
"""

from fastapi import APIRouter, Depends

from collexa.api.deps import get_contact_service
from collexa.core.auth import Principal, require_admin
from collexa.schemas.schemas import ContactCreate, ContactStatusUpdate, MessageResponse
from collexa.services.lead_service import LeadService
from collexa.services.mongo_service import serialize_doc, serialize_docs

router = APIRouter(prefix="/contactus", tags=["Contact Us"])


@router.post("", status_code=201)
async def send_message(data: ContactCreate, contacts: LeadService = Depends(get_contact_service)):
    contact = contacts.submit(data.model_dump())
    return {"success": True, "message": "Message sent successfully", "contact": serialize_doc(contact)}


@router.get("")
async def list_messages(
    principal: Principal = Depends(require_admin),
    contacts: LeadService = Depends(get_contact_service),
):
    items = contacts.list()
    return {"success": True, "count": len(items), "contacts": serialize_docs(items)}


@router.delete("/{message_id}", response_model=MessageResponse)
async def delete_message(
    message_id: str,
    principal: Principal = Depends(require_admin),
    contacts: LeadService = Depends(get_contact_service),
):
    contacts.delete(message_id)
    return MessageResponse(message="Message deleted successfully")


@router.patch("/{message_id}/status")
async def update_status(
    message_id: str,
    body: ContactStatusUpdate,
    principal: Principal = Depends(require_admin),
    contacts: LeadService = Depends(get_contact_service),
):
    contact = contacts.set_status(message_id, body.status)
    return {"success": True, "message": "Status updated successfully", "contact": serialize_doc(contact)}
