"""
Company Routes

POST /companies - Create company (admin only)
GET /companies - List companies by name
GET /companies/{company_id} - Get company details
PATCH /companies/{company_id} - Update company (admin only)
DELETE /companies/{company_id} - Delete company (admin only)
"""

from fastapi import APIRouter, Depends

from collexa.api.deps import get_company_service
from collexa.core.auth import Principal, require_admin
from collexa.schemas.schemas import CompanyCreate, CompanyUpdate, MessageResponse
from collexa.services.content_service import CompanyService
from collexa.services.mongo_service import serialize_doc, serialize_docs

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("", status_code=201)
async def create_company(
    data: CompanyCreate,
    principal: Principal = Depends(require_admin),
    companies: CompanyService = Depends(get_company_service),
):
    """Company names are unique."""
    company = companies.create(data.model_dump())
    return {"success": True, "message": "Company created successfully", "company": serialize_doc(company)}


@router.get("")
async def list_companies(companies: CompanyService = Depends(get_company_service)):
    items = companies.list_all()
    return {"success": True, "count": len(items), "companies": serialize_docs(items)}


@router.get("/{company_id}")
async def get_company(company_id: str, companies: CompanyService = Depends(get_company_service)):
    return {"success": True, "company": serialize_doc(companies.get(company_id))}


@router.patch("/{company_id}")
async def update_company(
    company_id: str,
    changes: CompanyUpdate,
    principal: Principal = Depends(require_admin),
    companies: CompanyService = Depends(get_company_service),
):
    company = companies.update(company_id, changes.model_dump(exclude_unset=True))
    return {"success": True, "message": "Company updated successfully", "company": serialize_doc(company)}


@router.delete("/{company_id}", response_model=MessageResponse)
async def delete_company(
    company_id: str,
    principal: Principal = Depends(require_admin),
    companies: CompanyService = Depends(get_company_service),
):
    companies.delete(company_id)
    return MessageResponse(message="Company deleted successfully")
