from societyhub.models.complaint import Complaint, ComplaintComment
from societyhub.schemas.complaint import ComplaintView, ComplaintDetailView, CommentView


def _base_fields(complaint: Complaint) -> dict:
    resident = complaint.resident
    return {
        "id": complaint.id,
        "title": complaint.title,
        "description": complaint.description,
        "category": complaint.category,
        "priority": complaint.priority,
        "status": complaint.status,
        "resolution_notes": complaint.resolution_notes or "",
        "created_at": complaint.created_at,
        "updated_at": complaint.updated_at,
        "assigned_staff_id": complaint.assigned_staff_id,
        "resident_id": complaint.resident_id,
        "resident_name": resident.name if resident else None,
        "resident_email": resident.email if resident else None,
        "unit_number": (resident.unit if resident and resident.unit else "-"),
    }


def map_complaint_to_view(complaint: Complaint) -> ComplaintView:
    """Flatten a complaint and its resident into a list row"""
    return ComplaintView(**_base_fields(complaint))


def map_complaint_to_detail(complaint: Complaint) -> ComplaintDetailView:
    """List row plus the assigned staff member's contact details"""
    staff = complaint.assigned_staff
    return ComplaintDetailView(
        **_base_fields(complaint),
        staff_name=staff.name if staff else None,
        staff_email=staff.email if staff else None
    )


def map_comment_to_view(comment: ComplaintComment) -> CommentView:
    author = comment.commented_by
    return CommentView(
        id=comment.id,
        complaint_id=comment.complaint_id,
        comment=comment.comment,
        commenter_name=author.name if author else None,
        created_at=comment.created_at
    )
