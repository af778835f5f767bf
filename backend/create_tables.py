from db import engine, Base
import models #Ensure that your models are imported so they register with Base (also pulls in models1)

Base.metadata.create_all(bind=engine)

# create_all only creates missing tables; schema changes go through alembic (alembic upgrade head).
