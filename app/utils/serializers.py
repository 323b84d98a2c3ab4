# JSON shapes shared by several blueprints


def _iso(dt):
    return dt.isoformat() if dt else None


def _money(value):
    return float(value) if value is not None else None


def user_summary(u):
    if u is None:
        return None
    return {
        "id": u.id,
        "name": u.name,
        "email": u.email,
        "rating": u.rating,
        "reviewCount": u.review_count,
        "campus": u.campus,
        "profileImage": u.profile_image,
        "isVerified": bool(u.is_verified),
        "role": u.role,
    }


def user_json(u):
    """Full profile without the password hash."""
    data = user_summary(u)
    data.update({
        "phone": u.phone,
        "university": u.university,
        "studentId": u.student_id,
        "trustScore": u.trust_score,
        "isActive": bool(u.is_active),
        "lastActive": _iso(u.last_active),
        "createdAt": _iso(u.created_at),
    })
    return data


def item_json(i, with_owner=True):
    data = {
        "id": i.id,
        "ownerId": i.owner_id,
        "title": i.title,
        "description": i.description,
        "category": i.category,
        "condition": i.condition,
        "images": i.images or [],
        "tags": i.tags or [],
        "dailyRate": _money(i.daily_rate),
        "securityDeposit": _money(i.security_deposit),
        "availability": i.availability,
        "location": {"address": i.address, "campus": i.campus},
        "minLendingPeriod": i.min_lending_period,
        "maxLendingPeriod": i.max_lending_period,
        "viewCount": i.view_count,
        "isActive": bool(i.is_active),
        "createdAt": _iso(i.created_at),
    }
    if with_owner:
        data["owner"] = user_summary(i.owner)
    return data


def lending_json(r):
    return {
        "id": r.id,
        "item": item_json(r.item, with_owner=False) if r.item else None,
        "borrower": user_summary(r.borrower),
        "lender": user_summary(r.lender),
        "startDate": _iso(r.start_date),
        "endDate": _iso(r.end_date),
        "status": r.status,
        "totalCost": _money(r.total_cost),
        "securityDeposit": _money(r.security_deposit),
        "message": r.message,
        "pickupLocation": r.pickup_location,
        "returnLocation": r.return_location,
        "actualReturnDate": _iso(r.actual_return_date),
        "lateReturnDays": r.late_return_days or 0,
        "lateFee": _money(r.late_fee) or 0.0,
        "cancellationReason": r.cancellation_reason,
        "createdAt": _iso(r.created_at),
        "updatedAt": _iso(r.updated_at),
    }


def chat_message_json(m, viewer_id):
    return {
        "id": m.id,
        "content": m.content,
        "createdAt": _iso(m.created_at),
        "isOwnMessage": m.sender_id == viewer_id,
    }


def notification_json(n):
    return {
        "id": n.id,
        "type": n.type,
        "title": n.title,
        "message": n.message,
        "relatedId": n.related_id,
        "link": n.link,
        "isRead": bool(n.is_read),
        "createdAt": _iso(n.created_at),
    }


def verification_json(v):
    return {
        "id": v.id,
        "user": user_summary(v.user),
        "message": v.message,
        "status": v.status,
        "adminNote": v.admin_note,
        "reviewedBy": v.reviewed_by_id,
        "reviewedAt": _iso(v.reviewed_at),
        "adminMessages": [
            {
                "id": m.id,
                "sender": {"id": m.sender_id, "name": m.sender.name if m.sender else None},
                "content": m.content,
                "timestamp": _iso(m.created_at),
            }
            for m in v.admin_messages
        ],
        "createdAt": _iso(v.created_at),
        "updatedAt": _iso(v.updated_at),
    }


def review_json(r):
    return {
        "id": r.id,
        "lendingRequest": r.lending_request_id,
        "reviewer": user_summary(r.reviewer),
        "reviewee": r.reviewee_id,
        "item": {"id": r.item_id, "title": r.item.title if r.item else None},
        "rating": r.rating,
        "comment": r.comment,
        "type": r.type,
        "categories": r.categories,
        "createdAt": _iso(r.created_at),
    }


def report_json(r):
    return {
        "id": r.id,
        "reporter": user_summary(r.reporter),
        "reportedItem": {"id": r.reported_item.id, "title": r.reported_item.title} if r.reported_item else None,
        "reportedUser": user_summary(r.reported_user),
        "reason": r.reason,
        "description": r.description,
        "status": r.status,
        "adminNotes": r.admin_notes,
        "resolvedBy": r.resolved_by_id,
        "resolvedAt": _iso(r.resolved_at),
        "createdAt": _iso(r.created_at),
    }
