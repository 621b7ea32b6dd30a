# Design tokens for StudyDesk UI

COLORS = {
    'background': '#F7F9FC',
    'surface': '#E7F0FF',
    'primary': '#5EA1FF',
    'primary_hover': '#4C92F5',
    'text': '#3C4450',
    'text_strong': '#133A62',
    'border': '#DCE3ED',
    'sidebar_active_bg': '#E7F0FF',
    'sidebar_bg': '#F7F9FC',
    'button_secondary_bg': '#E7F0FF',
    'notice_bg': '#E7F0FF',
    'notice_text': '#133A62',
    'active_border': '#3B82F6',
    'break_accent': '#0D9488',
}

DARK_COLORS = dict(
    COLORS,
    background='#111827',
    surface='#1F2937',
    text='#D1D5DB',
    text_strong='#F9FAFB',
    border='#374151',
    sidebar_active_bg='#1F2937',
    sidebar_bg='#111827',
    button_secondary_bg='#374151',
    notice_bg='#1F2937',
    notice_text='#F9FAFB',
)

# (header background, header text) per subject
SUBJECT_COLORS = {
    'Mathematics': ('#F3E8FF', '#6B21A8'),
    'Physics': ('#DBEAFE', '#1E40AF'),
    'Chemistry': ('#DCFCE7', '#166534'),
    'Revision': ('#FFEDD5', '#9A3412'),
}

FONTS = {
    'family': 'Inter, Manrope, Arial, sans-serif',
    'timer_size': 48,
    'total_size': 22,
    'countdown_size': 40,
    'button_size': 16,
    'sidebar_size': 16,
    'text': 14,
}


def palette(theme):
    return DARK_COLORS if theme == 'dark' else COLORS


def build_stylesheet(theme='light'):
    """Application-wide QSS generated from the tokens."""
    c = palette(theme)
    return f"""
    QWidget {{ background: {c['background']}; color: {c['text']}; font-family: {FONTS['family']}; font-size: {FONTS['text']}px; }}
    QListWidget {{ background: {c['sidebar_bg']}; border: none; font-size: {FONTS['sidebar_size']}px; }}
    QListWidget::item:selected {{ background: {c['sidebar_active_bg']}; color: {c['text_strong']}; border-left: 4px solid {c['primary']}; }}
    #TimerCard {{ background: {c['surface']}; border: 1px solid {c['border']}; border-radius: 16px; }}
    #TimerCard[active="true"] {{ border: 2px solid {c['active_border']}; }}
    #TimerLabel {{ font-size: {FONTS['timer_size']}px; font-weight: bold; color: {c['text_strong']}; }}
    #TotalLabel {{ font-size: {FONTS['total_size']}px; color: {c['text_strong']}; }}
    #CountdownLabel {{ font-size: {FONTS['countdown_size']}px; font-weight: bold; }}
    #NoticeLabel {{ background: {c['notice_bg']}; color: {c['notice_text']}; border-radius: 12px; padding: 8px 16px; }}
    QPushButton#StartBtn {{ background: {c['primary']}; color: white; border-radius: 12px; padding: 10px 24px; font-size: {FONTS['button_size']}px; font-weight: 600; }}
    QPushButton#StartBtn:hover {{ background: {c['primary_hover']}; }}
    QPushButton#EndBtn {{ background: {c['button_secondary_bg']}; border: 1px solid {c['border']}; border-radius: 12px; padding: 10px 24px; font-size: {FONTS['button_size']}px; }}
    """
