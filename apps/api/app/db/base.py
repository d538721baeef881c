from sqlalchemy.orm import declarative_base

# Model base class (SQL doküman backend'i buradan extend eder)
Base = declarative_base()
