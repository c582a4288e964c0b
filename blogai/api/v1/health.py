from fastapi import APIRouter, Depends

from blogai.ai.providers.cloudflare_runtime import get_inference_runtime

router = APIRouter()


@router.get("/health", summary="Health Check", description="Report liveness and whether worker-ai is bound.")
async def health_check(runtime=Depends(get_inference_runtime)):
    return {"status": "healthy", "worker_ai_bound": runtime is not None}
