"""HTTP routers for the herbal garden backend."""
