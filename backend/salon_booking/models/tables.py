from sqlalchemy import (
    Column,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


class StoreSettings(Base):
    __tablename__ = 'store_settings'

    id = Column(Integer, primary_key=True)
    tenant_id = Column(Text, nullable=False, unique=True)
    open_time = Column(Text, nullable=False, server_default=text("'09:00'"))
    close_time = Column(Text, nullable=False, server_default=text("'18:00'"))
    slot_duration = Column(Integer, nullable=False, server_default=text('30'))
    closed_days = Column(Text, nullable=False, server_default=text("'[]'"))
    cancellation_deadline_hours = Column(Integer, nullable=False, server_default=text('24'))
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class FeatureFlags(Base):
    __tablename__ = 'feature_flags'

    id = Column(Integer, primary_key=True)
    tenant_id = Column(Text, nullable=False, unique=True)
    enable_staff_selection = Column(Integer, nullable=False, server_default=text('0'))
    enable_staff_shift_management = Column(Integer, nullable=False, server_default=text('0'))


class Users(Base):
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True)
    tenant_id = Column(Text, nullable=False)
    name = Column(Text)
    email = Column(Text, nullable=False)
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    created_at = Column(DateTime, server_default=func.now())

    reservations = relationship('Reservations', back_populates='user')


class Menus(Base):
    __tablename__ = 'menus'

    id = Column(Integer, primary_key=True)
    tenant_id = Column(Text, nullable=False)
    name = Column(Text, nullable=False)
    price = Column(Float, nullable=False, server_default=text('0'))
    duration = Column(Integer, nullable=False)
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    description = Column(Text)

    reservations = relationship('Reservations', back_populates='menu')


class Staff(Base):
    __tablename__ = 'staff'

    id = Column(Integer, primary_key=True)
    tenant_id = Column(Text, nullable=False)
    name = Column(Text, nullable=False)
    role = Column(Text)
    is_active = Column(Integer, nullable=False, server_default=text('1'))

    shifts = relationship('StaffShifts', back_populates='staff', cascade='all, delete-orphan')
    vacations = relationship('StaffVacations', back_populates='staff', cascade='all, delete-orphan')
    reservations = relationship('Reservations', back_populates='staff')


class StaffShifts(Base):
    __tablename__ = 'staff_shifts'
    __table_args__ = (
        UniqueConstraint('staff_id', 'day_of_week'),
    )

    id = Column(Integer, primary_key=True)
    staff_id = Column(ForeignKey('staff.id', ondelete='CASCADE'), nullable=False)
    day_of_week = Column(Integer, nullable=False)  # 0 = Monday, 6 = Sunday
    start_time = Column(Text, nullable=False)
    end_time = Column(Text, nullable=False)
    is_active = Column(Integer, nullable=False, server_default=text('1'))

    staff = relationship('Staff', back_populates='shifts')


class StaffVacations(Base):
    __tablename__ = 'staff_vacations'

    id = Column(Integer, primary_key=True)
    staff_id = Column(ForeignKey('staff.id', ondelete='CASCADE'), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    reason = Column(Text)

    staff = relationship('Staff', back_populates='vacations')


class BlockedTimeSlots(Base):
    __tablename__ = 'blocked_time_slots'

    id = Column(Integer, primary_key=True)
    tenant_id = Column(Text, nullable=False)
    start_date_time = Column(DateTime, nullable=False)
    end_date_time = Column(DateTime, nullable=False)
    reason = Column(Text)
    created_at = Column(DateTime, server_default=func.now())


class Reservations(Base):
    __tablename__ = 'reservations'

    id = Column(Integer, primary_key=True)
    tenant_id = Column(Text, nullable=False, index=True)
    user_id = Column(ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    staff_id = Column(ForeignKey('staff.id'))  # NULL = pool
    menu_id = Column(ForeignKey('menus.id'), nullable=False)
    reserved_date = Column(Date, nullable=False, index=True)
    reserved_time = Column(Text, nullable=False)  # "HH:MM"
    status = Column(Text, nullable=False, server_default=text("'PENDING'"))
    notes = Column(Text)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    user = relationship('Users', back_populates='reservations')
    staff = relationship('Staff', back_populates='reservations')
    menu = relationship('Menus', back_populates='reservations')


class SchedulingLocks(Base):
    __tablename__ = 'scheduling_locks'
    __table_args__ = (
        UniqueConstraint('tenant_id', 'scope_key', 'lock_date'),
    )

    id = Column(Integer, primary_key=True)
    tenant_id = Column(Text, nullable=False)
    scope_key = Column(Text, nullable=False)  # "staff:<id>" | "pool" | "user:<id>"
    lock_date = Column(Date, nullable=False)
    acquired_at = Column(DateTime)
