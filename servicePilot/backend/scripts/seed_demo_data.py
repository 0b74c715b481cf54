"""
Seed script for ServicePilot development database.

- 4 technicians (one with no configured schedule, so the default applies)
- Work schedules with and without breaks, one Saturday shift
- Open orders with pending / in-progress / completed items to give each
  technician a realistic backlog

Run with: python -m scripts.seed_demo_data
"""

from datetime import time
from app.db.database import SessionLocal, engine
from app.db.models import (
    Base,
    Technicians,
    WorkSchedules,
    Orders,
    OrderStatus,
    OrderItems,
    OrderItemStatus,
    OrderSupportTechnicians,
)


def clear_tables(db):
    """Delete all rows in dependency order."""
    print("Clearing tables...")

    for model in [OrderSupportTechnicians, OrderItems, Orders, WorkSchedules, Technicians]:
        db.query(model).delete()

    db.commit()
    print("All tables cleared.")


def seed_technicians(db):
    print("Seeding technicians...")

    technicians = [
        Technicians(id=100001, full_name="Ana Torres", email="ana.torres@servicepilot.com"),
        Technicians(id=100002, full_name="Luis Méndez", email="luis.mendez@servicepilot.com"),
        Technicians(id=100003, full_name="Carla Ruiz", email="carla.ruiz@servicepilot.com"),
        # no schedule row: default Mon-Fri 08:00-16:00
        Technicians(id=100004, full_name="Jorge Salas", email="jorge.salas@servicepilot.com"),
    ]
    db.add_all(technicians)
    db.flush()
    print(f"  Created {len(technicians)} technicians")


def seed_work_schedules(db):
    print("Seeding work schedules...")

    schedules = [
        # Ana: Mon-Fri 08:00-17:00, 1h break
        WorkSchedules(employee_id=100001, work_days=[1, 2, 3, 4, 5],
                      start_time=time(8, 0), end_time=time(17, 0), break_duration_minutes=60),
        # Luis: Mon-Sat 07:00-15:00, 30min break
        WorkSchedules(employee_id=100002, work_days=[1, 2, 3, 4, 5, 6],
                      start_time=time(7, 0), end_time=time(15, 0), break_duration_minutes=30),
        # Carla: Tue-Sat 10:00-18:00, no break
        WorkSchedules(employee_id=100003, work_days=[2, 3, 4, 5, 6],
                      start_time=time(10, 0), end_time=time(18, 0), break_duration_minutes=0),
    ]
    db.add_all(schedules)
    db.flush()
    print(f"  Created {len(schedules)} work schedules")


def _add_order(db, technician_id, status, items):
    order = Orders(assigned_technician_id=technician_id, status=status)
    db.add(order)
    db.flush()
    for hours, quantity, shared, item_status in items:
        db.add(OrderItems(
            order_id=order.id,
            estimated_hours=hours,
            quantity=quantity,
            shared_time=shared,
            status=item_status,
        ))
    return order


def seed_orders(db):
    print("Seeding orders...")

    P, E, C = OrderItemStatus.PENDIENTE, OrderItemStatus.EN_PROCESO, OrderItemStatus.COMPLETADO

    # Ana: heavy backlog (~22h)
    _add_order(db, 100001, OrderStatus.EN_PROCESO, [(6, 1, False, E), (2, 1, True, P), (3, 1, False, C)])
    _add_order(db, 100001, OrderStatus.PENDIENTE, [(4, 2, False, P), (1.5, 4, False, P)])
    # Luis: light backlog (5h)
    big = _add_order(db, 100002, OrderStatus.PENDIENTE, [(2.5, 2, False, P)])
    # Carla: nothing open, one closed order
    _add_order(db, 100003, OrderStatus.FINALIZADA, [(8, 1, False, C)])
    # Unassigned order
    _add_order(db, None, OrderStatus.PENDIENTE, [(3, 1, False, P)])

    db.flush()
    db.add(OrderSupportTechnicians(order_id=big.id, technician_id=100003, reduction_percentage=20))
    print("  Created 5 orders")


def main():
    Base.metadata.create_all(engine)
    db = SessionLocal()

    try:
        clear_tables(db)
        seed_technicians(db)
        seed_work_schedules(db)
        seed_orders(db)
        db.commit()

        print("\n" + "="*50)
        print("Seeding complete!")
        print("="*50)
        print("\nTechnician summary:")
        print("  100001 - Ana (Mon-Fri 8-17, 1h break, ~22h backlog)")
        print("  100002 - Luis (Mon-Sat 7-15, 30min break, 5h backlog)")
        print("  100003 - Carla (Tue-Sat 10-18, no backlog)")
        print("  100004 - Jorge (default schedule, no backlog)")
        print("="*50 + "\n")

    except Exception as e:
        db.rollback()
        print(f"\nError during seeding: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
