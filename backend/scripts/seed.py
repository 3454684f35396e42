"""Seed script to create a demo tenant with a sample collection."""
from app.config import get_settings
from app.database import Database
from app.services.documents import DocumentStore, DocumentScope
from app.services.provisioning import Created, ProvisioningWorkflow


def seed_database(database: Database, tenant_name: str = "demo", icon: str = "🚀") -> str | None:
    """Create the demo tenant and a ``users`` collection with one document.

    Returns the tenant name, or None if the tenant could not be created.
    """
    database.init()
    db = database.session()

    try:
        workflow = ProvisioningWorkflow(db)
        tenant = workflow.tenants.lookup(tenant_name)

        if not tenant:
            print(f"Creating tenant {tenant_name}...")
            result = workflow.create_tenant(tenant_name, icon)
            if not isinstance(result, Created):
                print(f"Could not create tenant: {result.reason}")
                return None
            tenant = result.tenant
        else:
            print(f"Tenant already exists: {tenant.name}")

        collection = workflow.create_collection(tenant, "users")
        store = DocumentStore(db)
        scope = DocumentScope(tenant=tenant, collection=collection)
        if store.count(scope) == 0:
            doc = store.create(scope, {"name": "Ann", "email": "ann@example.com"})
            print(f"Created document {doc.id} in {tenant.name}/users")

        return tenant.name
    finally:
        db.close()


if __name__ == "__main__":
    settings = get_settings()
    database = Database.from_settings(settings)
    try:
        name = seed_database(database)
        if name:
            print(f"\nSeed complete. Try: curl {settings.protocol}://{name}.{settings.root_domain}/api/users")
    finally:
        database.dispose()
