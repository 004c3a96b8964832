from fastapi import APIRouter

from contentgen.api.deps import StorageDep

router = APIRouter(prefix="/utils", tags=["utils"])


@router.get("/health-check/")
async def health_check() -> bool:
    return True


@router.get("/storage-check/")
def storage_check(storage: StorageDep) -> bool:
    return storage.available
