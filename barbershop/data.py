# barbershop/data.py

import asyncio
import logging
from typing import Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from .core import day_bounds, is_reference, parse_timestamp, split_full_name
from .db import engine as default_engine, open_session
from .errors import InvalidInput, NotFound
from .models import Appointment, Barber
from .schemas import AppointmentCreate, AppointmentUpdate, BarberCreate, BarberUpdate

logger = logging.getLogger(__name__)


# Each operation runs in a worker thread with its own session, one commit each
class BookingDataSource:

    def __init__(self, bind: Engine = default_engine):
        self.bind = bind

    def _session(self) -> Session:
        return open_session(self.bind)

    # Appointments

    async def get_appointments(
        self, barber_id: Optional[str] = None, date: Optional[str] = None
    ) -> list[Appointment]:
        return await asyncio.to_thread(self._get_appointments, barber_id, date)

    def _get_appointments(self, barber_id, date):
        stmt = select(Appointment)

        if date:
            # [date 00:00, date+1 00:00) in UTC
            start, end = day_bounds(date)
            stmt = stmt.where(Appointment.time >= start).where(Appointment.time < end)
        if barber_id:
            if not is_reference(barber_id):
                raise InvalidInput("Barber ID is invalid")
            stmt = stmt.where(Appointment.barber_id == barber_id)

        stmt = stmt.order_by(Appointment.time)

        with self._session() as session:
            return list(session.exec(stmt).all())

    async def get_appointment(self, appointment_id: str) -> Optional[Appointment]:
        return await asyncio.to_thread(self._get_appointment, appointment_id)

    def _get_appointment(self, appointment_id):
        # a malformed ID is bad input, a missing one is just absent
        if not is_reference(appointment_id):
            raise InvalidInput("Appointment ID is invalid")
        with self._session() as session:
            return session.get(Appointment, appointment_id)

    async def create_appointment(self, data: AppointmentCreate) -> Appointment:
        return await asyncio.to_thread(self._create_appointment, data)

    def _create_appointment(self, data: AppointmentCreate):
        appointment = Appointment(
            barber_id=data.barber_id,
            name=split_full_name(data.full_name) if data.name is None else data.name.model_dump(),
            email=data.email,
            phone_number=data.phone_number,
            duration=data.duration,
            service_name=data.service_name,
            time=parse_timestamp(data.time),
        )

        # 1) Check that the barber exists
        with self._session() as session:
            self._check_barber(session, data.barber_id)

        # 2) Persist the appointment
        with self._session() as session:
            session.add(appointment)
            session.commit()
        logger.info("Created appointment %s for barber %s", appointment.id, data.barber_id)

        # 3) Add the appointment ID to the barber's list
        self._push_appointment_id(data.barber_id, appointment.id)
        return appointment

    @staticmethod
    def _check_barber(session: Session, barber_id: str) -> None:
        if not is_reference(barber_id) or session.get(Barber, barber_id) is None:
            raise InvalidInput("Barber ID is invalid")

    def _push_appointment_id(self, barber_id: str, appointment_id: str) -> None:
        with self._session() as session:
            barber = session.get(Barber, barber_id)
            if barber is None:
                logger.error("Barber %s vanished before appointment %s was linked", barber_id, appointment_id)
                raise NotFound("Barber not found")
            barber.appointment_ids = [*barber.appointment_ids, appointment_id]
            session.add(barber)
            session.commit()

    async def update_appointment(self, appointment_id: str, data: AppointmentUpdate) -> Appointment:
        return await asyncio.to_thread(self._update_appointment, appointment_id, data)

    def _update_appointment(self, appointment_id, data: AppointmentUpdate):
        if not is_reference(appointment_id):
            raise InvalidInput("Appointment ID is invalid")

        changes = data.model_dump(exclude_none=True, exclude={"full_name"})
        if data.full_name is not None and data.name is None:
            changes["name"] = split_full_name(data.full_name)
        if "time" in changes:
            changes["time"] = parse_timestamp(changes["time"])

        with self._session() as session:
            appointment = session.get(Appointment, appointment_id)
            if appointment is None:
                raise NotFound("Appointment not found")
            if "barber_id" in changes:
                self._check_barber(session, changes["barber_id"])
            for key, value in changes.items():
                setattr(appointment, key, value)
            session.add(appointment)
            session.commit()

        logger.info("Updated appointment %s (%s)", appointment_id, ", ".join(sorted(changes)))
        return appointment

    # Barbers

    async def get_barbers(self, date_time: Optional[str] = None) -> list[Barber]:
        return await asyncio.to_thread(self._get_barbers, date_time)

    def _get_barbers(self, date_time):
        at = parse_timestamp(date_time) if date_time else None

        with self._session() as session:
            barbers = list(session.exec(select(Barber)).all())
            if at is None:
                return barbers
            # Looking for free barbers: populate each barber's appointments...
            booked = self._populate_appointments(session, barbers)

        # ... and drop barbers that have any appointment at exactly that time
        return [
            barber
            for barber in barbers
            if not any(appointment.time == at for appointment in booked[barber.id])
        ]

    @staticmethod
    def _populate_appointments(session: Session, barbers: list[Barber]) -> dict[str, list[Appointment]]:
        ids = {appointment_id for barber in barbers for appointment_id in barber.appointment_ids}
        found = {}
        if ids:
            stmt = select(Appointment).where(col(Appointment.id).in_(sorted(ids)))
            found = {appointment.id: appointment for appointment in session.exec(stmt).all()}
        return {
            barber.id: [found[i] for i in barber.appointment_ids if i in found]
            for barber in barbers
        }

    async def get_barber(self, barber_id: Optional[str] = None, email: Optional[str] = None) -> Barber:
        return await asyncio.to_thread(self._get_barber, barber_id, email)

    def _get_barber(self, barber_id, email):
        found = None
        with self._session() as session:
            if barber_id:
                if is_reference(barber_id):
                    found = session.get(Barber, barber_id)
            elif email:
                found = session.exec(select(Barber).where(Barber.email == email)).first()
        if found is None:
            raise NotFound("Barber not found")
        return found

    async def create_barber(self, data: BarberCreate) -> Barber:
        return await asyncio.to_thread(self._create_barber, data)

    def _create_barber(self, data: BarberCreate):
        # only the creation fields, never the appointment list
        barber = Barber(
            email=data.email,
            name=data.name.model_dump() if data.name else {},
            profile_image_url=data.profile_image_url,
        )
        with self._session() as session:
            session.add(barber)
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                raise InvalidInput("Email already registered")
        logger.info("Created barber %s", barber.id)
        return barber

    async def update_barber(self, barber_id: str, data: BarberUpdate) -> Barber:
        return await asyncio.to_thread(self._update_barber, barber_id, data)

    def _update_barber(self, barber_id, data: BarberUpdate):
        if not is_reference(barber_id):
            raise InvalidInput("Barber ID is invalid")

        changes = data.model_dump(exclude_none=True)
        with self._session() as session:
            barber = session.get(Barber, barber_id)
            if barber is None:
                raise NotFound("Barber not found")
            for key, value in changes.items():
                setattr(barber, key, value)
            session.add(barber)
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                raise InvalidInput("Email already registered")

        logger.info("Updated barber %s (%s)", barber_id, ", ".join(sorted(changes)))
        return barber
