"""BlogFusion Streamlit front end."""
