"""
WasteWatch - development server entry point.

Run with: python run.py
"""

import os
from dotenv import load_dotenv

# Load .env
load_dotenv()

from wastewatch import create_app

app = create_app()

if __name__ == '__main__':
    debug = os.environ.get('FLASK_ENV') == 'development'
    port = int(os.environ.get('PORT', 5000))

    print(f"""
    =================================================
           WasteWatch Development Server
    =================================================
      URL: http://localhost:{port}
      API: http://localhost:{port}/api
      Gemini API: {'configured' if app.config.get('GEMINI_API_KEY') else 'not configured'}
    =================================================
    """)

    app.run(
        host='0.0.0.0',
        port=port,
        debug=debug
    )
