import os, streamlit as st
import settings
from utils.formatting import mask_secret

keys = [settings.ENV_USER, settings.ENV_SERVER, settings.ENV_WAREHOUSE, settings.ENV_DATABASE,
        settings.ENV_SCHEMA, settings.ENV_CONNECTION_NAME]
st.title("Env Check")
values = {k: os.getenv(k, "<missing>") for k in keys}
values[settings.ENV_PASSWORD] = mask_secret(os.getenv(settings.ENV_PASSWORD))
st.write(values)
