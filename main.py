import logging
import tkinter as tk

from smartattend.logic import AttendanceSystem
from smartattend.ui import AttendanceApp

def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    system = AttendanceSystem()
    system.load()
    root = tk.Tk()
    app = AttendanceApp(root, system)
    root.mainloop()

if __name__ == "__main__":
    main()
