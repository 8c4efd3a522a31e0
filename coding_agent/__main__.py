from coding_agent.main import app

app()
