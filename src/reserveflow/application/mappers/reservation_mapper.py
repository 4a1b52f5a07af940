from __future__ import annotations

from uuid import uuid4

from reserveflow.application.dto.requests import CustomerRequest
from reserveflow.application.dto.responses import CustomerResponse, ReservationResponse
from reserveflow.domain.common.ids import CustomerId
from reserveflow.domain.reservation.entities import Customer, Reservation


def to_customer(request: CustomerRequest) -> Customer:
    return Customer(
        customer_id=CustomerId(request.customer_id or f"cus_{uuid4().hex[:12]}"),
        name=request.name,
        phone=request.phone,
        email=request.email,
        notes=request.notes,
        vip_status=request.vip_status,
    )


def to_reservation_response(reservation: Reservation) -> ReservationResponse:
    customer = reservation.customer
    return ReservationResponse(
        id=str(reservation.reservation_id),
        customer=CustomerResponse(
            id=str(customer.customer_id),
            name=customer.name,
            phone=customer.phone,
            email=customer.email,
            notes=customer.notes,
            vipStatus=customer.vip_status,
        ),
        partySize=reservation.party_size,
        date=reservation.date.isoformat(),
        startTime=reservation.start_time,
        endTime=reservation.end_time,
        tableIds=sorted(str(table_id) for table_id in reservation.table_ids),
        status=reservation.status.value,
        specialRequests=reservation.special_requests,
        createdAt=reservation.created_at,
        updatedAt=reservation.updated_at,
    )
