def get_db_models():
    """
    Dynamically import models to avoid circular imports.
    Returns list of SQLAlchemy models for registration or other purposes.
    """
    from models.user import User
    from models.apartment import Apartment
    from models.tenant import Tenant
    from models.rent_payment import RentPayment
    from models.task import Task
    from models.notification import Notification

    return [
        User,
        Apartment,
        Tenant,
        RentPayment,
        Task,
        Notification,
    ]
