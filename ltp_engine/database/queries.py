DETECTED_SETUP_COLUMNS = """
    symbol, direction, setup_stage,
    confluence_score, level_score, trend_score, patience_score, mtf_score,
    primary_level_type, primary_level_price, patience_candles,
    suggested_entry, suggested_stop, target_1, target_2, target_3, risk_reward,
    coach_note, detected_at
"""

FETCH_RECENT_SETUPS = f"""
    SELECT {DETECTED_SETUP_COLUMNS}
    FROM detected_setups
    WHERE detected_at > %s
    ORDER BY confluence_score DESC
"""

FETCH_RECENT_SETUPS_FOR_SYMBOLS = f"""
    SELECT {DETECTED_SETUP_COLUMNS}
    FROM detected_setups
    WHERE detected_at > %s
      AND symbol = ANY(%s)
    ORDER BY confluence_score DESC
"""

UPSERT_DETECTED_SETUP = f"""
    INSERT INTO detected_setups ({DETECTED_SETUP_COLUMNS}, detected_by)
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, 'system')
    ON CONFLICT (symbol) DO UPDATE SET
        direction = excluded.direction,
        setup_stage = excluded.setup_stage,
        confluence_score = excluded.confluence_score,
        level_score = excluded.level_score,
        trend_score = excluded.trend_score,
        patience_score = excluded.patience_score,
        mtf_score = excluded.mtf_score,
        primary_level_type = excluded.primary_level_type,
        primary_level_price = excluded.primary_level_price,
        patience_candles = excluded.patience_candles,
        suggested_entry = excluded.suggested_entry,
        suggested_stop = excluded.suggested_stop,
        target_1 = excluded.target_1,
        target_2 = excluded.target_2,
        target_3 = excluded.target_3,
        risk_reward = excluded.risk_reward,
        coach_note = excluded.coach_note,
        detected_at = excluded.detected_at
"""

FETCH_ACTIVE_KEY_LEVELS = """
    SELECT level_type, price, timeframe, strength
    FROM key_levels
    WHERE symbol = %s
      AND expires_at > %s
"""

CLEAR_KEY_LEVELS = """
    DELETE FROM key_levels
    WHERE symbol = %s
"""

INSERT_KEY_LEVEL = """
    INSERT INTO key_levels (symbol, level_type, timeframe, price, strength, expires_at)
    VALUES (%s, %s, %s, %s, %s, %s)
"""

FETCH_RECENT_MTF_ANALYSIS = """
    SELECT timeframe, trend, structure, ema_position, momentum, orb_status, vwap_position
    FROM mtf_analysis
    WHERE symbol = %s
      AND calculated_at > %s
"""

UPSERT_MTF_ANALYSIS = """
    INSERT INTO mtf_analysis
        (symbol, timeframe, trend, structure, ema_position, momentum,
         orb_status, vwap_position, calculated_at)
    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, CURRENT_TIMESTAMP)
    ON CONFLICT (symbol, timeframe) DO UPDATE SET
        trend = excluded.trend,
        structure = excluded.structure,
        ema_position = excluded.ema_position,
        momentum = excluded.momentum,
        orb_status = excluded.orb_status,
        vwap_position = excluded.vwap_position,
        calculated_at = CURRENT_TIMESTAMP
"""
